"""prompt_toolkit styles for the branch-job prompts.

`QUESTIONARY_STYLE_SELECT` styles the checkbox in `cli.tui.select_branch_jobs`;
`QUESTIONARY_STYLE_CONFIRM` styles the y/n question in `Out.confirm`. The
question line is red in both because both lead to deleting jobs.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "question": "bold ansibrightred",
        "pointer": "bold ansibrightcyan",
        "highlighted": "bold ansibrightcyan",
        "selected": "ansicyan",
        "answer": "bold ansibrightcyan",
        "instruction": "ansibrightblack",
    }
)

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "qmark": "bold ansibrightred",
        "question": "bold ansibrightred",
        "answer": "bold ansibrightred",
        "instruction": "ansibrightblack",
    }
)
