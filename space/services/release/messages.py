"""User-facing release messages."""

from __future__ import annotations


def creating_release_msg(*, listed: bool, latest: bool) -> str:
    listed_info = " listed" if listed else ""
    latest_info = " with the latest Revision" if latest else ""
    return f"Creating a{listed_info} Release{latest_info} ..."


def success_summary(*, listed: bool) -> list[str]:
    lines = [
        "Lift off -- successfully created a new Release!",
        "Your Release is available globally on 5 Deta Edges",
        "Anyone can install their own copy of your app.",
    ]
    if listed:
        lines.append("Listed on Discovery for others to find!")
    return lines


def status_unknown_msg(develop_url: str) -> str:
    return (
        "Failed to check if release succeeded. "
        f"Please check {develop_url} if a new release was created successfully."
    )


RELEASE_FAILED_MSG = "Failed to create release. Please try again!"
CHOOSE_REVISION_PROMPT = "Choose a revision (most recent revisions):"
USE_LATEST_PROMPT = "Do you want to use the latest revision?"
NO_REVISIONS_HINT = "create a revision by running `space push`"
