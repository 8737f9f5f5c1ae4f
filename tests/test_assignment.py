import pytest

from badgescan.extractors.assignment import AssignmentSession, SessionClosedError, SessionState, SessionStateError
from badgescan.extractors.candidates import FieldCategory, Line
from badgescan.extractors.orchestrator import run_extractors


@pytest.fixture
def scan(demo_text):
    return run_extractors(demo_text)


@pytest.fixture
def session(scan):
    return AssignmentSession.from_scan(scan)


def test_lifecycle_states(scan):
    s = AssignmentSession()
    assert s.state is SessionState.EMPTY
    s.initialize(scan)
    assert s.state is SessionState.INITIALIZED
    s.remove_assignment(FieldCategory.PHONE)
    assert s.state is SessionState.EDITING
    s.finalize()
    assert s.state is SessionState.FINALIZED


def test_initialize_seeds_selector_output(session):
    assert session.get(FieldCategory.NAME) == "John Doe"
    assert session.get("company") == "Tech Solutions Inc"
    assert session.get(FieldCategory.PHONE) == "+1 (555) 123-4567"


def test_initialize_on_noise_leaves_everything_empty():
    s = AssignmentSession.from_scan(run_extractors("???\n###"))
    assert all(v is None for v in s.values.values())
    assert s.finalize() == {}


def test_assign_line_is_idempotent(session, scan):
    line = scan.relevant[2]
    assert session.assign_line(line, FieldCategory.NAME)
    once = session.values
    assert session.assign_line(line, FieldCategory.NAME)
    assert session.values == once
    assert session.get(FieldCategory.NAME) == "Tech Solutions Inc"


def test_assign_line_ignores_lines_outside_the_scan(session):
    before = session.values
    assert not session.assign_line(Line("Someone Else", 99), FieldCategory.NAME)
    assert session.values == before


def test_assign_line_ignores_filtered_lines():
    scan = run_extractors("Building tomorrow's innovation today\nAcme Corp")
    s = AssignmentSession.from_scan(scan)
    assert not s.assign_line(scan.filtered[0], FieldCategory.TITLE)
    assert s.get(FieldCategory.TITLE) is None


def test_same_line_in_two_categories(session, scan):
    line = scan.relevant[0]
    assert session.assign_line(line, FieldCategory.NAME)
    assert session.assign_line(line, FieldCategory.COMPANY)
    assert session.get(FieldCategory.NAME) == session.get(FieldCategory.COMPANY) == "John Doe"


def test_free_text(session):
    assert session.assign_free_text(FieldCategory.TITLE, "Chief Tinkerer")
    assert session.get(FieldCategory.TITLE) == "Chief Tinkerer"


@pytest.mark.parametrize("blank", ["", "  ", "\n\t"])
def test_blank_free_text_is_rejected(session, blank):
    assert not session.assign_free_text(FieldCategory.EMAIL, blank)
    assert session.get(FieldCategory.EMAIL) == "john.doe@techsolutions.com"


def test_removed_field_is_omitted_on_finalize(session):
    session.remove_assignment(FieldCategory.COMPANY)
    out = session.finalize()
    assert "company" not in out
    assert out["name"] == "John Doe"


def test_line_consumption_is_advisory(session, scan):
    name_line, title_line = scan.relevant[0], scan.relevant[1]
    assert session.is_line_consumed(name_line)
    session.remove_assignment(FieldCategory.NAME)
    assert not session.is_line_consumed(name_line)
    # consumed lines can still be reassigned
    assert session.is_line_consumed(title_line)
    assert session.assign_line(title_line, FieldCategory.NAME)


def test_finalize_returns_plain_keys(session):
    assert session.finalize() == {
        "name": "John Doe",
        "title": "Senior Software Engineer",
        "company": "Tech Solutions Inc",
        "email": "john.doe@techsolutions.com",
        "phone": "+1 (555) 123-4567",
    }


def test_finalized_session_is_closed(session, scan):
    session.finalize()
    with pytest.raises(SessionClosedError):
        session.assign_free_text(FieldCategory.NAME, "Late Edit")
    with pytest.raises(SessionClosedError):
        session.assign_line(scan.relevant[0], FieldCategory.TITLE)
    with pytest.raises(SessionClosedError):
        session.remove_assignment(FieldCategory.NAME)
    with pytest.raises(SessionClosedError):
        session.initialize(scan)


def test_cancel_discards_values(session):
    session.cancel()
    assert session.state is SessionState.CANCELLED
    assert all(v is None for v in session.values.values())
    with pytest.raises(SessionClosedError):
        session.finalize()


def test_edits_require_initialization(scan):
    s = AssignmentSession()
    with pytest.raises(SessionStateError):
        s.assign_free_text(FieldCategory.NAME, "Jane Roe")
    with pytest.raises(SessionStateError):
        s.assign_line(scan.relevant[0], FieldCategory.NAME)
    with pytest.raises(SessionStateError):
        s.remove_assignment(FieldCategory.PHONE)
    assert s.state is SessionState.EMPTY


def test_initialize_does_not_overwrite_edits(session, scan):
    session.assign_free_text(FieldCategory.NAME, "Johnny Doe")
    with pytest.raises(SessionStateError):
        session.initialize(scan)
    assert session.get(FieldCategory.NAME) == "Johnny Doe"
    assert session.state is SessionState.EDITING
