import pytest

from badgescan.extractors.candidates import split_lines
from badgescan.extractors.relevance import NoiseRules, is_relevant, noise_reason, partition_lines


@pytest.mark.parametrize("text,reason", [
    ("A", "too_short"),
    ("Your trusted partner", "marketing"),
    ("Building tomorrow's innovation today", "marketing"),
    ("Enabling smarter logistics everywhere", "tagline"),
    ("www.acme.io", "url"),
    ("Visit acme.com", "url"),
    ("https://acme.io/team", "url"),
    ("DevCon Summit 2024", "event"),
    ("Speaker", "event"),
])
def test_noise_lines_are_dropped(text, reason):
    assert noise_reason(text) == reason
    assert not is_relevant(text)


@pytest.mark.parametrize("text", [
    "John Doe",
    "Jo",
    "Enabling AI",                      # tagline verb, but short
    "jane@acme.com",                    # domain with @ is contact data
    "your.name@acme.io",                # marketing word rescued by @
    "Call our team 555 123 4567",       # marketing word rescued by digits
    "Business Development",             # "us" only inside a word
    "Four Seasons Hotel",               # "our" only inside a word
    "Tech Solutions Inc",
])
def test_contact_like_lines_are_kept(text):
    assert noise_reason(text) is None


def test_rules_can_be_replaced():
    rules = NoiseRules(marketing=frozenset({"acme"}), tagline_verbs=(), url_markers=(), event_words=())
    assert noise_reason("Acme Corp", rules) == "marketing"
    assert noise_reason("Acme Corp") is None
    # empty tables disable their rule
    assert noise_reason("DevCon Summit", rules) is None
    assert noise_reason("www.acme.io", rules) is None


def test_partition_keeps_scan_order():
    lines = split_lines("Jane Roe\n\n  Our mission  \nwww.roe.dev\nCTO\n")
    relevant, filtered = partition_lines(lines)
    assert [(l.index, l.text) for l in relevant] == [(0, "Jane Roe"), (3, "CTO")]
    assert [(l.index, l.text) for l in filtered] == [(1, "Our mission"), (2, "www.roe.dev")]
