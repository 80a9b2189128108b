"""Tests for eslog.manifest — keyword tables, event resolution, generation."""

import io

import pytest

from eslog.events import EventDefinition, EventLevel, KEYWORDS_ALL
from eslog.lib.log_lib import init_output
from eslog.manifest import (
    EventAttribute,
    ManifestError,
    build_keyword_table,
    find_provider,
    generate_manifest,
    keyword_names,
    parse_keywords,
    parse_manifest,
    parse_mask,
    provider_names,
    resolve_events,
)


def _manifest(provider_body, name="P", extra=""):
    return (
        "<instrumentationManifest><instrumentation><events>"
        f'<provider name="{name}">{provider_body}</provider>{extra}'
        "</events></instrumentation></instrumentationManifest>"
    )


# =============================================================================
# Parsing
# =============================================================================

class TestParseManifest:

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_empty_rejected(self, text):
        with pytest.raises(ManifestError):
            parse_manifest(text)

    def test_ill_formed_rejected(self):
        with pytest.raises(ManifestError, match="not well-formed"):
            parse_manifest("<instrumentation><events>")

    def test_manifest_error_is_value_error(self):
        assert issubclass(ManifestError, ValueError)

    def test_provider_names(self, keywords_manifest, logging_manifest):
        assert provider_names(keywords_manifest) == ["KeywordsEventSource"]
        assert provider_names(logging_manifest) == ["P"]

    def test_find_provider_by_name(self):
        root = parse_manifest(_manifest("", name="A", extra='<provider name="B"/>'))
        assert find_provider(root, "B").get("name") == "B"
        assert find_provider(root, "C") is None
        assert find_provider(root).get("name") == "A"

    def test_find_provider_on_provider_element(self):
        root = parse_manifest('<provider name="Solo"><events/></provider>')
        assert find_provider(root, "Solo") is root


# =============================================================================
# Keyword table
# =============================================================================

class TestParseMask:

    @pytest.mark.parametrize("text, value", [
        ("0x1", 1),
        ("0x8", 8),
        ("0xF0", 0xF0),
        ("0xffffffffffffffff", KEYWORDS_ALL),
    ])
    def test_valid(self, text, value):
        assert parse_mask(text) == value

    @pytest.mark.parametrize("text", [
        None, "", "0x", "0x0", "1", "0X1", "0xZZ", "0x1g", " 0x1",
        "0x10000000000000000",
    ])
    def test_invalid(self, text):
        assert parse_mask(text) is None


class TestBuildKeywordTable:

    def test_keywords_sample(self, keywords_manifest):
        table = build_keyword_table(keywords_manifest, "KeywordsEventSource")
        assert table == {
            "FirstKeyword": 0x1,
            "SecondKeyword": 0x2,
            "ThirdKeyword": 0x4,
            "FourthKeyword": 0x8,
        }

    def test_accepts_parsed_root(self, keywords_manifest):
        root = parse_manifest(keywords_manifest)
        assert len(build_keyword_table(root, "KeywordsEventSource")) == 4

    def test_invalid_entries_skipped(self):
        text = _manifest(
            "<keywords>"
            '<keyword name="Good" mask="0x2"/>'
            '<keyword name="Zero" mask="0x0"/>'
            '<keyword name="Decimal" mask="4"/>'
            '<keyword name="" mask="0x8"/>'
            '<keyword name="   " mask="0x8"/>'
            '<keyword mask="0x8"/>'
            '<keyword name="NoMask"/>'
            "</keywords>")
        assert build_keyword_table(text, "P") == {"Good": 0x2}

    def test_duplicate_name_last_wins(self):
        text = _manifest(
            "<keywords>"
            '<keyword name="Kw" mask="0x1"/>'
            '<keyword name="Kw" mask="0x4"/>'
            "</keywords>")
        assert build_keyword_table(text, "P") == {"Kw": 0x4}

    def test_missing_provider_gives_empty_table(self, keywords_manifest):
        assert build_keyword_table(keywords_manifest, "Other") == {}

    def test_missing_keywords_section_gives_empty_table(self):
        assert build_keyword_table(_manifest("<events/>"), "P") == {}

    def test_scoped_to_named_provider(self):
        text = _manifest(
            '<keywords><keyword name="A" mask="0x1"/></keywords>',
            name="One",
            extra='<provider name="Two"><keywords>'
                  '<keyword name="B" mask="0x2"/></keywords></provider>')
        assert build_keyword_table(text, "Two") == {"B": 0x2}

    def test_skips_reported_on_manifest_channel(self):
        buf = io.StringIO()
        init_output(verbosity=0, channels=["manifest:3"], file=buf)
        build_keyword_table(
            _manifest('<keywords><keyword name="Zero" mask="0x0"/></keywords>'), "P")
        assert "skipped keyword" in buf.getvalue()
        assert "'Zero'" in buf.getvalue()


class TestParseKeywords:

    def test_or_of_hits(self):
        assert parse_keywords("A B", {"A": 0x2, "B": 0x4}) == 0x6

    def test_unknown_tokens_ignored(self):
        assert parse_keywords("A Nope B", {"A": 0x2, "B": 0x4}) == 0x6

    def test_any_whitespace_separates(self):
        assert parse_keywords(" A\tB\n", {"A": 0x2, "B": 0x4}) == 0x6

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_absent_is_none(self, text):
        assert parse_keywords(text, {"A": 1}) == 0


# =============================================================================
# Event resolution
# =============================================================================

class TestResolveEvents:

    def test_keywords_sample(self, keywords_manifest):
        events = resolve_events(keywords_manifest, "KeywordsEventSource")
        assert events["OneKeywordExample"] == EventAttribute(
            event_id=1, level=EventLevel.INFORMATIONAL, channel=0, keywords=0x1)
        assert events["TwoKeywordExample"].keywords == 0x6
        assert events["ThreeKeywordExample"].keywords == 0xE
        assert events["ThreeKeywordExample"].event_id == 3

    def test_single_keyword_provider(self):
        """Provider P, FirstKeyword 0x1, OneKeywordExample value 1."""
        text = _manifest(
            '<events><event value="1" symbol="OneKeywordExample" keywords="FirstKeyword"/></events>'
            '<keywords><keyword name="FirstKeyword" mask="0x1"/></keywords>')
        attr = resolve_events(text, "P")["OneKeywordExample"]
        assert attr.event_id == 1
        assert attr.keywords == 0x1

    def test_logging_manifest(self, logging_manifest):
        events = resolve_events(logging_manifest, "P")
        assert len(events) == 10
        debug = events["Debug"]
        assert debug.event_id == 11
        assert debug.level is EventLevel.VERBOSE
        assert debug.channel == 19
        assert debug.keywords == 0x1
        assert events["DebugException"].keywords == 0x3
        assert events["Fatal"].level is EventLevel.CRITICAL

    def test_explicit_keyword_table_used(self):
        text = _manifest('<events><event value="4" symbol="E" keywords="X"/></events>')
        assert resolve_events(text, "P", {"X": 0x10})["E"].keywords == 0x10

    def test_defaults_for_missing_attributes(self):
        text = _manifest('<events><event value="7" symbol="Bare"/></events>')
        attr = resolve_events(text, "P")["Bare"]
        assert attr == EventAttribute(7, EventLevel.INFORMATIONAL, 0, 0)

    def test_bogus_level_is_informational(self):
        text = _manifest('<events><event value="7" symbol="E" level="win:Bogus"/></events>')
        assert resolve_events(text, "P")["E"].level is EventLevel.INFORMATIONAL

    def test_bad_channel_is_none(self):
        text = _manifest('<events><event value="7" symbol="E" channel="Admin"/></events>')
        assert resolve_events(text, "P")["E"].channel == 0

    @pytest.mark.parametrize("attrs", [
        'symbol="E"',
        'value="" symbol="E"',
        'value="0" symbol="E"',
        'value="-3" symbol="E"',
        'value="abc" symbol="E"',
        'value="5"',
        'value="5" symbol=""',
        'value="5" symbol="  "',
    ])
    def test_invalid_events_skipped(self, attrs):
        text = _manifest(
            f'<events><event {attrs}/><event value="9" symbol="Kept"/></events>')
        assert list(resolve_events(text, "P")) == ["Kept"]

    def test_duplicate_symbol_last_wins(self):
        text = _manifest(
            '<events>'
            '<event value="1" symbol="Info"/>'
            '<event value="2" symbol="Info" level="win:Warning"/>'
            '</events>')
        attr = resolve_events(text, "P")["Info"]
        assert attr.event_id == 2
        assert attr.level is EventLevel.WARNING

    def test_unknown_provider_resolves_nothing(self, logging_manifest):
        assert resolve_events(logging_manifest, "NotThere") == {}

    def test_missing_events_section(self):
        assert resolve_events(_manifest("<keywords/>"), "P") == {}

    def test_extra_symbols_kept(self, keywords_manifest):
        """Symbols outside the logging kinds still resolve."""
        events = resolve_events(keywords_manifest, "KeywordsEventSource")
        assert set(events) == {"OneKeywordExample", "TwoKeywordExample",
                               "ThreeKeywordExample"}

    def test_deterministic(self, logging_manifest):
        assert resolve_events(logging_manifest, "P") == resolve_events(logging_manifest, "P")


# =============================================================================
# Generation
# =============================================================================

class TestKeywordNames:

    def test_whole_masks_only(self):
        keywords = {"A": 0x1, "B": 0x2, "AB": 0x3, "C": 0x4}
        assert keyword_names(0x3, keywords) == ["A", "B", "AB"]
        assert keyword_names(0x1, keywords) == ["A"]
        assert keyword_names(0, keywords) == []


class TestGenerateManifest:

    @pytest.fixture
    def generated(self):
        return generate_manifest(
            "My-Provider",
            [
                EventDefinition(2, "Second", EventLevel.ERROR, channel=17, keywords=0x2),
                EventDefinition(1, "First", EventLevel.VERBOSE, keywords=0x3),
            ],
            {"Alpha": 0x1, "Beta": 0x2},
        )

    def test_uses_events_namespace(self, generated):
        assert 'xmlns="http://schemas.microsoft.com/win/2004/08/events"' in generated

    def test_provider_attributes(self, generated):
        provider = find_provider(parse_manifest(generated), "My-Provider")
        assert provider is not None
        assert provider.get("symbol") == "My_Provider"

    def test_events_sorted_by_id(self, generated):
        assert generated.index('symbol="First"') < generated.index('symbol="Second"')

    def test_resolves_back(self, generated):
        events = resolve_events(generated, "My-Provider")
        assert events["First"] == EventAttribute(1, EventLevel.VERBOSE, 0, 0x3)
        assert events["Second"] == EventAttribute(2, EventLevel.ERROR, 17, 0x2)

    def test_keyword_masks_in_hex(self, generated):
        assert 'mask="0x1"' in generated
        assert build_keyword_table(generated, "My-Provider") == {"Alpha": 0x1, "Beta": 0x2}

    def test_no_keywords_section_without_keywords(self):
        text = generate_manifest("P", [EventDefinition(1, "Only")])
        assert "keywords" not in text
        assert resolve_events(text, "P")["Only"].event_id == 1

    def test_zero_channel_omitted(self):
        text = generate_manifest("P", [EventDefinition(1, "Only")])
        assert "channel=" not in text
