from __future__ import annotations

from injector.buildscript import block_pattern, render_block_opening, render_new_block, rewrite_block

STATEMENT = 'dependencies.add "classpath", "io.bitrise.trace.plugin:trace-gradle-plugin:0.0.3"'

GRADLE_CONTENT = (
    "\n"
    "someContent\n"
    "buildscript {"
    "{gap}"
    "    repositories {\n"
    "        mavenLocal()\n"
    "        google()\n"
    "        jcenter()\n"
    "    }\n"
    "    dependencies {\n"
    "        classpath 'com.android.tools.build:gradle:4.0.2'\n"
    "    }\n"
    "} "
    "\nsomeContent"
)


def _content(gap: str) -> str:
    return GRADLE_CONTENT.replace("{gap}", gap)


def test_existing_block_gets_statement_after_opening_brace() -> None:
    result = rewrite_block(_content("\n"), "buildscript", STATEMENT, "jcenter")

    assert result.updated
    opening = render_block_opening("buildscript", STATEMENT, "jcenter")
    expected = _content("\n").replace("buildscript {", opening) + "\n"
    assert result.content == expected
    assert result.content.index(f"buildscript {{\n    {STATEMENT}") == result.offset


def test_rewrite_removes_comments_everywhere() -> None:
    text = (
        "// top comment\n"
        "/* block\n"
        "   comment */\n"
        "buildscript { // trailing\n"
        "    repositories { google() } /* inline */\n"
        "}\n"
        "android { /* keep code */ compileSdk 34 }\n"
    )
    result = rewrite_block(text, "buildscript", STATEMENT, "jcenter")

    assert result.updated
    assert "//" not in result.content
    assert "/*" not in result.content
    assert "android {  compileSdk 34 }" in result.content
    assert result.content.count("\n") >= text.count("\n")
    assert "    repositories { google() } \n" in result.content


def test_commented_out_block_is_not_matched() -> None:
    text = "// buildscript {\n/*\nbuildscript {\n}\n*/\nplugins { }\n"
    result = rewrite_block(text, "buildscript", STATEMENT, "jcenter")

    assert not result.updated
    assert result.content is None


def test_only_first_block_is_rewritten() -> None:
    text = "buildscript {\n}\nbuildscript {\n}\n"
    result = rewrite_block(text, "buildscript", STATEMENT, "jcenter")

    assert result.updated
    assert result.content.count(STATEMENT) == 1
    assert result.content.endswith("}\nbuildscript {\n}\n")


def test_block_pattern_spans_newlines_and_requires_keyword_start() -> None:
    pattern = block_pattern("buildscript")
    assert pattern.search("buildscript\n\t {") is not None
    assert pattern.search("mybuildscript {") is None
    assert pattern.search("buildscript()") is None


def test_new_block_lists_every_repository() -> None:
    block = render_new_block("buildscript", STATEMENT, ["jcenter", "google"])
    assert block == (
        "\nbuildscript {\n"
        f"    {STATEMENT}\n"
        "    repositories {\n"
        "        jcenter()\n"
        "        google()\n"
        "    }\n"
        "}"
    )
