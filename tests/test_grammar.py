"""
Tests for the annotation grammar.

Covers each matcher on raw text plus the title/description cleanup helpers.
"""

import pytest

from hnp_importer.grammar import AnnotationGrammar, AnnotationKind

# =============================================================================
# MATCHERS
# =============================================================================


class TestHashTags:
    def test_finds_all_hash_tags_in_order(self, grammar):
        tags = grammar.hash_tags("Fix login #Bugs and #ui_polish #v2")
        assert [t.name for t in tags] == ["bugs", "ui_polish", "v2"]
        assert all(t.kind == AnnotationKind.HASH_TAG for t in tags)

    def test_keeps_raw_token(self, grammar):
        [tag] = grammar.hash_tags("x #Backend")
        assert tag.raw == "#Backend"
        assert tag.name == "backend"

    def test_bare_hash_is_not_a_tag(self, grammar):
        assert grammar.hash_tags("Support C# and # alone") == []

    def test_unicode_word_characters(self, grammar):
        [tag] = grammar.hash_tags("Traduire #Équipe")
        assert tag.name == "équipe"


class TestMentions:
    def test_finds_mentions(self, grammar):
        mentions = grammar.mentions("ping @Alice and @bo")
        assert [m.name for m in mentions] == ["alice", "bo"]

    def test_no_mentions(self, grammar):
        assert grammar.mentions("nobody here @ all") == []


class TestSubtasks:
    def test_lines_starting_with_brackets(self, grammar):
        text = "Intro\n[] Buy milk\n[]Feed cat\nOutro"
        assert [t.name for t in grammar.subtasks(text)] == ["Buy milk", "Feed cat"]

    def test_brackets_mid_line_are_ignored(self, grammar):
        assert grammar.subtasks("see [] here\n  [] indented") == []

    def test_strip_subtasks(self, grammar):
        text = "Details\n[] one\nMore\n[] two"
        assert grammar.strip_subtasks(text) == "Details\n\nMore"


class TestEstimate:
    @pytest.mark.parametrize(
        "title, hours",
        [
            ("Task ~1d2h30m", 10.5),
            ("Task ~45m", 0.75),
            ("Task ~2h", 2.0),
            ("Task ~1d", 8.0),
            ("Task ~1h30m36s", 1.51),
            ("Task ~90s", 0.025),
        ],
    )
    def test_components_sum_to_hours(self, grammar, title, hours):
        assert grammar.estimate_hours(title) == pytest.approx(hours)

    def test_no_estimate_is_zero(self, grammar):
        assert grammar.estimate_hours("Plain title #bugs") == 0.0

    def test_out_of_order_components_stop_matching(self, grammar):
        # "~30m2h" matches only the minutes group
        assert grammar.estimate_hours("Task ~30m2h") == pytest.approx(0.5)

    def test_first_estimate_wins(self, grammar):
        assert grammar.estimate_hours("~1h then ~3h") == pytest.approx(1.0)

    def test_bare_tilde_is_not_an_estimate(self, grammar):
        title = "Fix ~/.bashrc loader ~2h"
        assert grammar.estimate_hours(title) == pytest.approx(2.0)
        assert grammar.strip_title(title) == "Fix ~/.bashrc loader"

    def test_tilde_without_unit_is_text(self, grammar):
        assert grammar.estimate_hours("About ~5 users") == 0.0
        assert grammar.strip_title("About ~5 users") == "About ~5 users"


class TestUrgency:
    def test_first_marker(self, grammar):
        urgency = grammar.urgency("Fix it !High now !low")
        assert urgency.kind == AnnotationKind.URGENCY
        assert urgency.name == "high"

    def test_no_marker(self, grammar):
        assert grammar.urgency("Calm ticket!") is None


# =============================================================================
# CLEANUP
# =============================================================================


class TestStripTitle:
    def test_removes_every_title_annotation(self, grammar):
        title = "Fix bug #bugs @alice ~2h !high"
        assert grammar.strip_title(title) == "Fix bug"

    def test_collapses_whitespace(self, grammar):
        assert grammar.strip_title("  Fix   #ui  the \t button  ") == "Fix the button"

    def test_is_idempotent(self, grammar):
        once = grammar.strip_title("Refactor #backend @bo ~1d !low parser")
        assert grammar.strip_title(once) == once

    def test_spliced_tokens_are_removed_too(self, grammar):
        # Removing "~2h" would otherwise leave a fresh "#foo" behind
        cleaned = grammar.strip_title("Task #~2hfoo")
        assert cleaned == "Task"
        assert grammar.strip_title(cleaned) == cleaned


class TestRewriteMentions:
    def test_replacement_callback_gets_annotation(self, grammar):
        out = grammar.rewrite_mentions("ping @Bo and @al", lambda m: f"<{m.name}>")
        assert out == "ping <bo> and <al>"


class TestGrammarConstruction:
    def test_missing_pattern_rejected(self):
        with pytest.raises(ValueError, match="missing patterns"):
            AnnotationGrammar({AnnotationKind.HASH_TAG: AnnotationGrammar().patterns["hash_tag"]})
