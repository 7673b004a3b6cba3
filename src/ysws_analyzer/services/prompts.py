"""
Prompt assembly for YSWS classification.

The judging rules are business rules and are embedded word for word; edit
``YSWS_RULES`` only when the program's rules change.
"""

from __future__ import annotations

from enum import Enum

from ..domain.models import DemoUrlType, ReadmeTemplate, ReleaseType, Submission

README_UNAVAILABLE = "README content could not be fetched."
REPO_UNAVAILABLE = "Repository content could not be fetched."

YSWS_RULES: tuple[str, ...] = (
    "The project must be open source: the repository must be public and contain the project's actual source code.",
    "The project must be something the submitter built themselves. A fork or copy of another project only counts if the submitter made substantial, clearly visible changes of their own.",
    "The demo must let a reviewer try the project directly: a live website, a playable build, a downloadable release, or an installable package.",
    "A video demo only counts when the project cannot reasonably be hosted or run by a reviewer (for example hardware projects, or software that needs special equipment or paid accounts). In that case classify the demo as justified_video; otherwise a video is video and does not count.",
    "A link to the source repository itself is not a demo unless the project is a library, CLI tool or similar that is meant to be used from source, and the README explains how to install and run it.",
    "Executable software such as desktop apps, games and CLI tools should have a downloadable release (for example a GitHub release) or clear build instructions in the README.",
    "The README must explain what the project is and how to use or run it. An unmodified starter template README (for example the default Create React App, Vite or Next.js README) does not count.",
    "The project must not be a trivial tutorial follow-along, a bare starter template or a 'hello world' with no meaningful work added.",
    "The project must not be malicious, deceptive or built to break the terms of service of another platform.",
    "If any of these rules is not clearly satisfied by the provided information, the project does not count.",
)

OUTPUT_FIELDS: tuple[tuple[str, str], ...] = (
    ("project_name", "string, the name of the project"),
    ("description", "string, one or two sentences describing the project"),
    ("readme_url", "string, the README URL given above"),
    ("counts_for_ysws", "boolean, true only if the project satisfies every rule"),
    ("ysws_reasoning", "string, one or two sentences justifying the decision"),
    ("demo_url_type", "one of {values}"),
    ("release_link", "string URL of a release page or download, or null if there is none"),
    ("release_type", "one of {values}"),
    ("readme_template", "one of {values}"),
    ("is_fork", "boolean, true if the repository is a fork or copy of another project"),
)

_FIELD_ENUMS: dict[str, type[Enum]] = {
    "demo_url_type": DemoUrlType,
    "release_type": ReleaseType,
    "readme_template": ReadmeTemplate,
}


def _enum_values(enum_cls: type[Enum]) -> str:
    return ", ".join(f'"{member.value}"' for member in enum_cls)


def format_output_fields() -> str:
    """Render the required JSON fields with their allowed values."""
    lines = []
    for name, description in OUTPUT_FIELDS:
        enum_cls = _FIELD_ENUMS.get(name)
        if enum_cls is not None:
            description = description.format(values=_enum_values(enum_cls))
        lines.append(f"- {name}: {description}")
    return "\n".join(lines)


def format_rules() -> str:
    return "\n".join(f"{i}. {rule}" for i, rule in enumerate(YSWS_RULES, start=1))


def build_prompt(
    submission: Submission,
    readme_content: str | None,
    repo_content: str | None,
) -> str:
    """
    Build the classification instruction for one submission.

    Args:
        submission: The submitted URLs
        readme_content: Fetched README text, or None if it could not be fetched
        repo_content: Fetched repository page text, or None

    Returns:
        A single prompt string asking for a bare JSON object
    """
    readme_block = readme_content if readme_content is not None else README_UNAVAILABLE
    repo_block = repo_content if repo_content is not None else REPO_UNAVAILABLE

    return f"""You are reviewing a project submitted to a "You Ship, We Ship" (YSWS) program.
Decide whether the project counts for YSWS by applying the rules below.

Submission:
- Repository URL: {submission.repo_url}
- Demo URL: {submission.demo_url}
- README URL: {submission.readme_url}

Respond with a JSON object containing exactly these fields:
{format_output_fields()}

Rules:
{format_rules()}

--- BEGIN README ---
{readme_block}
--- END README ---

--- BEGIN REPOSITORY PAGE ---
{repo_block}
--- END REPOSITORY PAGE ---

Return only the JSON object. Do not wrap it in Markdown and do not add any text before or after it."""
