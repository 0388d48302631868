# ==============================================
# Tests for SectionClassifier
# ==============================================
#
# Line routing, header handling and the fallback behavior for
# malformed input.
# ==============================================

import dataclasses

import pytest

from haproxy_sections.classification import (
    ClassifierOptions,
    ClassifierState,
    HeaderMatch,
    MissingName,
    SectionClassifier,
    SectionType,
)


def classify(text: str, **options):
    return SectionClassifier(ClassifierOptions(**options)).classify(text.splitlines())


# ==============================================
# Basic routing
# ==============================================

class TestRouting:
    """Lines end up in the collection of the section they follow."""

    def test_scenario(self, scenario_lines):
        doc = SectionClassifier().classify(scenario_lines)
        assert doc.global_lines == ("maxconn 100",)
        assert doc.defaults_lines == ()
        assert dict(doc.frontend_blocks) == {"public": ("bind :80",)}
        assert dict(doc.backend_blocks) == {"be1": ("server s1 1.2.3.4:80",)}
        assert doc.warnings == ()

    def test_lines_are_trimmed_but_inner_whitespace_kept(self):
        doc = classify("defaults\n   tcp-request  inspect-delay 5s   \n\ttimeout client 30s\t\n")
        assert doc.defaults_lines == ("tcp-request  inspect-delay 5s", "timeout client 30s")

    def test_order_preserved(self):
        doc = classify("backend be\nb\na\nc\na\n")
        assert doc.backend_blocks["be"] == ("b", "a", "c", "a")

    def test_blank_and_comment_lines_dropped(self):
        doc = classify("global\n\n   \n# comment\n   # indented comment\ndaemon\n")
        assert doc.global_lines == ("daemon",)

    def test_comment_does_not_reset_section(self):
        doc = classify("frontend fe\nbind :80\n# frontend other\nmode http\n")
        assert doc.frontend_blocks["fe"] == ("bind :80", "mode http")
        assert "other" not in doc.frontend_blocks

    def test_custom_comment_marker(self):
        doc = classify("global\n; comment\n# kept\n", comment_marker=";")
        assert doc.global_lines == ("# kept",)

    def test_headers_never_stored(self, sample_config_path):
        with open(sample_config_path) as f:
            doc = SectionClassifier().classify(f)
        classifier = SectionClassifier()
        every_line = list(doc.global_lines) + list(doc.defaults_lines)
        for blocks in (doc.frontend_blocks, doc.backend_blocks):
            for lines in blocks.values():
                every_line.extend(lines)
        assert every_line
        assert all(classifier.match_header(line) is None for line in every_line)

    def test_lines_consumed_lazily(self):
        seen = []

        def lines():
            for line in ("global", "daemon", "backend be", "server s 1.1.1.1:80"):
                seen.append(line)
                yield line

        doc = SectionClassifier().classify(lines())
        assert seen == ["global", "daemon", "backend be", "server s 1.1.1.1:80"]
        assert doc.backend_blocks["be"] == ("server s 1.1.1.1:80",)

    def test_empty_input(self):
        doc = classify("")
        assert doc.global_lines == ()
        assert len(doc.frontend_blocks) == 0
        assert len(doc.backend_blocks) == 0


# ==============================================
# Named blocks
# ==============================================

class TestNamedBlocks:
    """Frontend/backend headers and their block names."""

    def test_header_without_content_is_present(self):
        doc = classify("frontend x\nbackend y\n")
        assert doc.frontend_blocks["x"] == ()
        assert doc.backend_blocks["y"] == ()

    def test_repeated_name_accumulates(self):
        doc = classify("backend be\none\nbackend other\nx\nbackend be\ntwo\n")
        assert doc.backend_blocks["be"] == ("one", "two")
        assert list(doc.backend_blocks) == ["be", "other"]

    def test_same_name_in_frontend_and_backend_kept_apart(self):
        doc = classify("frontend app\nbind :80\nbackend app\nserver s 1.1.1.1:80\n")
        assert doc.frontend_blocks["app"] == ("bind :80",)
        assert doc.backend_blocks["app"] == ("server s 1.1.1.1:80",)

    def test_extra_header_tokens_ignored(self):
        doc = classify("frontend fe1 extra tokens\nbind :80\n")
        assert doc.frontend_blocks["fe1"] == ("bind :80",)

    def test_global_after_backend_switches_back(self):
        doc = classify("backend be\nmode http\nglobal\ndaemon\n")
        assert doc.backend_blocks["be"] == ("mode http",)
        assert doc.global_lines == ("daemon",)


# ==============================================
# Header matching
# ==============================================

class TestHeaderMatch:
    """Prefix vs token keyword matching."""

    def test_prefix_mode_matches_glued_keyword(self):
        doc = classify("frontend fe\nbind :80\nfrontendx other\nmode http\n")
        # "frontendx other" opens the block "other"
        assert doc.frontend_blocks["fe"] == ("bind :80",)
        assert doc.frontend_blocks["other"] == ("mode http",)

    def test_token_mode_treats_glued_keyword_as_content(self):
        doc = classify(
            "frontend fe\nbind :80\nfrontendx other\nmode http\n",
            header_match=HeaderMatch.TOKEN,
        )
        assert doc.frontend_blocks["fe"] == ("bind :80", "frontendx other", "mode http")
        assert "other" not in doc.frontend_blocks

    def test_keywords_are_case_sensitive(self):
        doc = classify("global\nGlobal stuff\nBACKEND be\n")
        assert doc.global_lines == ("Global stuff", "BACKEND be")
        assert len(doc.backend_blocks) == 0

    def test_default_backend_is_content(self):
        doc = classify("frontend fe\ndefault_backend be_no_sni\n")
        assert doc.frontend_blocks["fe"] == ("default_backend be_no_sni",)

    @pytest.mark.parametrize("line,expected", [
        ("global", SectionType.GLOBAL),
        ("defaults", SectionType.DEFAULTS),
        ("frontend public", SectionType.FRONTEND),
        ("backend be", SectionType.BACKEND),
        ("bind :80", None),
    ])
    def test_match_header(self, line, expected):
        assert SectionClassifier().match_header(line) == expected

    def test_options_accept_plain_strings(self):
        options = ClassifierOptions(header_match="token", missing_name="discard")
        assert options.header_match is HeaderMatch.TOKEN
        assert options.missing_name is MissingName.DISCARD

    def test_invalid_option_rejected(self):
        with pytest.raises(ValueError):
            ClassifierOptions(header_match="regex")


# ==============================================
# Malformed input
# ==============================================

class TestMalformedInput:
    """Best-effort fallbacks, never exceptions."""

    def test_content_before_any_header_dropped(self):
        doc = classify("orphan line\nanother\nglobal\ndaemon\n")
        assert doc.global_lines == ("daemon",)
        # one warning for the whole run of dropped lines
        assert len(doc.warnings) == 1
        assert "orphan line" in doc.warnings[0]

    def test_unnamed_backend_reuses_previous_name(self):
        doc = classify("backend be1\none\nbackend\ntwo\n")
        assert doc.backend_blocks["be1"] == ("one", "two")
        assert len(doc.warnings) == 1
        assert "reusing 'be1'" in doc.warnings[0]

    def test_unnamed_backend_reuses_frontend_name(self):
        doc = classify("frontend fe\nbind :80\nbackend\nserver s 1.1.1.1:80\n")
        assert doc.frontend_blocks["fe"] == ("bind :80",)
        assert doc.backend_blocks["fe"] == ("server s 1.1.1.1:80",)

    def test_unnamed_backend_discard_mode(self):
        doc = classify(
            "backend be1\none\nbackend\ntwo\nthree\nbackend be2\nfour\n",
            missing_name=MissingName.DISCARD,
        )
        assert doc.backend_blocks["be1"] == ("one",)
        assert doc.backend_blocks["be2"] == ("four",)
        assert len(doc.warnings) == 1
        assert "discarded" in doc.warnings[0]

    def test_unnamed_frontend_without_previous_name(self):
        doc = classify("frontend\nbind :80\n")
        assert len(doc.frontend_blocks) == 0
        assert len(doc.warnings) == 2

    def test_header_ends_a_dropped_run(self):
        """Each run of dropped content is reported once; a header starts a new run."""
        doc = classify("a\nb\nfrontend\nc\nd\n")
        assert len(doc.warnings) == 3
        assert "'a'" in doc.warnings[0]
        assert "without a name" in doc.warnings[1]
        assert "'c'" in doc.warnings[2]

    def test_warning_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="haproxy_sections.classification.classifier"):
            classify("backend be1\nbackend\nx\n")
        assert "without a name" in caplog.text


# ==============================================
# State and immutability
# ==============================================

class TestStateAndDocument:

    def test_state_enter_named(self):
        state = ClassifierState().enter(SectionType.BACKEND, "be")
        assert state == ClassifierState(SectionType.BACKEND, "be")

    def test_state_enter_global_keeps_name(self):
        state = ClassifierState(SectionType.BACKEND, "be").enter(SectionType.GLOBAL)
        assert state.section_type == SectionType.GLOBAL
        assert state.subsection_name == "be"

    def test_state_enter_clears_discarding(self):
        state = ClassifierState(SectionType.NONE, None, discarding=True).enter(SectionType.GLOBAL)
        assert state.discarding is False

    def test_with_discarding_unchanged_returns_same_state(self):
        state = ClassifierState(SectionType.BACKEND, "be")
        assert state.with_discarding(False) is state
        assert state.with_discarding(True) == ClassifierState(SectionType.BACKEND, "be", True)

    def test_state_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ClassifierState().section_type = SectionType.GLOBAL

    def test_document_is_read_only(self):
        doc = classify("backend be\nx\n")
        with pytest.raises(TypeError):
            doc.backend_blocks["new"] = ()
        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.global_lines = ("x",)

    def test_classify_twice_gives_equal_documents(self, scenario_lines):
        classifier = SectionClassifier()
        assert classifier.classify(scenario_lines) == classifier.classify(scenario_lines)
