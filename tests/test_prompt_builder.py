from services.labeling.prompt_builder import REQUEST_CHAR_LIMIT, build_label_prompt, truncate_request


def test_prompt_lists_requests_in_order_with_budget():
    prompt = build_label_prompt(
        ["Set up Stripe webhooks", "Handle failed\npayments"],
        28,
    )

    assert "Maximum 28 characters." in prompt.system
    assert prompt.user == (
        "User requests:\n"
        "1) Set up Stripe webhooks\n"
        "2) Handle failed payments\n\n"
        "Return only the label."
    )


def test_prompt_includes_workspace_line_when_named():
    prompt = build_label_prompt(["Draft the launch email"], 20, workspace_name="marketing")
    assert prompt.user.startswith("Workspace: marketing\n\nUser requests:\n1) Draft the launch email")


def test_prompt_is_deterministic():
    requests = ["Add {braces} to the template", "Second"]
    assert build_label_prompt(requests, 28) == build_label_prompt(requests, 28)
    assert "{braces}" in build_label_prompt(requests, 28).user


def test_combined_prompt_joins_system_and_user():
    prompt = build_label_prompt(["One"], 28)
    assert prompt.combined() == f"{prompt.system}\n\n{prompt.user}"


def test_truncate_request_collapses_line_breaks():
    assert truncate_request("  first line\r\nsecond line  ") == "first line second line"


def test_truncate_request_marks_truncation_with_ellipsis():
    truncated = truncate_request("x" * 250)
    assert len(truncated) == REQUEST_CHAR_LIMIT
    assert truncated.endswith("...")
    assert truncate_request("y" * REQUEST_CHAR_LIMIT) == "y" * REQUEST_CHAR_LIMIT
