from io import StringIO

import pytest

from bottomup import Profile
from bottomup.reporters.common import time_fmt
from bottomup.reporters.summary import SummaryReporter
from tests.utils import make_node
from tests.utils import make_profile
from tests.utils import make_root
from tests.utils import recursive_profile


def _location_rows(output):
    return [
        line
        for line in output.getvalue().splitlines()
        if line.startswith("│") and " at app.js:" in line
    ]


def test_sorted_by_total_time():
    # GIVEN
    reporter = SummaryReporter.from_profile(Profile.from_dict(recursive_profile()))
    output = StringIO()

    # WHEN
    reporter.render(sort="total", include_url=True, file=output)

    # THEN
    rows = _location_rows(output)
    assert len(rows) == 2
    assert "A at app.js:2" in rows[0]
    assert "B at app.js:6" in rows[1]


def test_sorted_by_self_time():
    # GIVEN
    data = make_profile(
        [
            make_root([2]),
            make_node(2, "A", 2, [3], line_number=1),
            make_node(3, "B", 18, line_number=5),
        ]
    )
    reporter = SummaryReporter.from_profile(Profile.from_dict(data))
    output = StringIO()

    # WHEN
    reporter.render(sort="self", include_url=True, file=output)

    # THEN
    rows = _location_rows(output)
    assert "B at app.js:6" in rows[0]
    assert "A at app.js:2" in rows[1]


def test_max_rows():
    # GIVEN
    data = make_profile(
        [make_root([2, 3, 4])]
        + [make_node(i, f"f{i}", i, line_number=i) for i in (2, 3, 4)]
    )
    reporter = SummaryReporter.from_profile(Profile.from_dict(data))
    output = StringIO()

    # WHEN
    reporter.render(max_rows=2, include_url=True, file=output)

    # THEN
    rows = _location_rows(output)
    assert len(rows) == 2
    assert "f4" in rows[0]
    assert "f3" in rows[1]


def test_sort_column_is_marked_in_the_header():
    # GIVEN
    reporter = SummaryReporter.from_profile(Profile.from_dict(recursive_profile()))
    output = StringIO()

    # WHEN
    reporter.render(sort="self", file=output)

    # THEN
    assert "<Self" in output.getvalue()


def test_sorted_by_name():
    # GIVEN
    data = make_profile(
        [make_root([2, 3, 4])]
        + [
            make_node(2, "c", 9, line_number=2),
            make_node(3, "a", 1, line_number=3),
            make_node(4, "b", 5, line_number=4),
        ]
    )
    reporter = SummaryReporter.from_profile(Profile.from_dict(data))
    output = StringIO()

    # WHEN
    reporter.render(sort="name", include_url=True, file=output)

    # THEN
    rows = _location_rows(output)
    assert "a at app.js:4" in rows[0]
    assert "b at app.js:5" in rows[1]
    assert "c at app.js:3" in rows[2]
    assert "<Location>" in output.getvalue()


def test_urls_are_hidden_by_default():
    # GIVEN
    reporter = SummaryReporter.from_profile(Profile.from_dict(recursive_profile()))
    output = StringIO()

    # WHEN
    reporter.render(file=output)

    # THEN
    assert "app.js" not in output.getvalue()
    assert _location_rows(output) == []
    assert "│ A " in output.getvalue()


@pytest.mark.parametrize(
    "milliseconds, expected",
    [
        (0, "0.000ms"),
        (0.25, "250.000us"),
        (1.5, "1.500ms"),
        (999.9994, "999.999ms"),
        (2500, "2.500s"),
    ],
)
def test_time_fmt(milliseconds, expected):
    # GIVEN/WHEN/THEN
    assert time_fmt(milliseconds) == expected


def test_proportions_are_relative_to_the_root_total_time():
    # GIVEN
    reporter = SummaryReporter.from_profile(Profile.from_dict(recursive_profile()))

    # WHEN / THEN
    assert reporter.total_time == 2.0
    assert reporter._proportion(1.0) == 0.5
    assert SummaryReporter([], total_time=0)._proportion(1.0) == 0.0
