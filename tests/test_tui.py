from branchteardown.cli.common.tui_style import (
    QUESTIONARY_STYLE_CONFIRM,
    QUESTIONARY_STYLE_SELECT,
)
from branchteardown.cli.tui import _MAX_JOB_NAME_WIDTH, _branch_choice_title, _truncate
from branchteardown.core.jobs import BranchJob


def test_branch_choice_title_shows_project_branch_and_aligned_id():
    first = _branch_choice_title(
        BranchJob(id=11, name="alpha", project="p", branch_name="feature"), name_width=12
    )
    second = _branch_choice_title(
        BranchJob(id=22, name="beta", project="p", branch_name="main"), name_width=12
    )

    assert first.startswith("alpha")
    assert "[p:feature]" in first
    assert first.index("[") == second.index("[")
    assert first.endswith("(id: 11)")


def test_branch_choice_title_truncates_long_names():
    long_name = "x" * (_MAX_JOB_NAME_WIDTH + 10)
    rendered = _branch_choice_title(
        BranchJob(id=99, name=long_name, project="p"),
        name_width=_MAX_JOB_NAME_WIDTH,
    )

    assert "..." in rendered
    assert "[p:?]" in rendered
    assert _truncate(long_name, _MAX_JOB_NAME_WIDTH).endswith("...")


def test_prompt_styles_only_cover_classes_the_prompts_render():
    select_classes = {name for name, _ in QUESTIONARY_STYLE_SELECT.style_rules}
    confirm_classes = {name for name, _ in QUESTIONARY_STYLE_CONFIRM.style_rules}

    assert select_classes == {
        "question",
        "pointer",
        "highlighted",
        "selected",
        "answer",
        "instruction",
    }
    assert confirm_classes == {"qmark", "question", "answer", "instruction"}
