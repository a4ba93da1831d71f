from bottomup import Profile
from bottomup.formatting import format_bottom_up
from tests.utils import make_node
from tests.utils import make_profile
from tests.utils import make_root
from tests.utils import recursive_profile


class TestFormatter:
    def test_recursive_example(self):
        # GIVEN
        profile = Profile.from_dict(recursive_profile())

        # WHEN
        output = profile.formatted_bottom_up_profile()

        # THEN
        assert output == [
            {"functionName": "A", "selfTime": 1.5, "totalTime": 2.0},
            {"functionName": "B", "selfTime": 0.5, "totalTime": 1.0},
        ]

    def test_include_url(self):
        # GIVEN
        records = Profile.from_dict(recursive_profile()).bottom_up_nodes()

        # WHEN
        output = format_bottom_up(records, include_url=True)

        # THEN
        assert output[0] == {
            "functionName": "A",
            "url": "app.js",
            "selfTime": 1.5,
            "totalTime": 2.0,
        }
        assert list(output[0]) == ["functionName", "url", "selfTime", "totalTime"]

    def test_sorted_output_is_deterministic(self):
        # GIVEN
        data = make_profile(
            [
                make_root([2, 3, 4]),
                make_node(2, "zeta", 1, script_id="2"),
                make_node(3, "alpha", 1, script_id="3", line_number=8),
                make_node(4, "alpha", 1, script_id="3", line_number=2),
            ]
        )
        records = Profile.from_dict(data).bottom_up_nodes()

        # WHEN
        output = format_bottom_up(records, sort=True)
        reversed_output = format_bottom_up(list(reversed(records)), sort=True)

        # THEN
        assert [entry["functionName"] for entry in output] == [
            "alpha",
            "alpha",
            "zeta",
        ]
        assert output == reversed_output

    def test_empty_input(self):
        # GIVEN/WHEN/THEN
        assert format_bottom_up([]) == []

    def test_records_are_not_modified(self):
        # GIVEN
        records = Profile.from_dict(recursive_profile()).bottom_up_nodes()
        before = [(record.self_time, record.total_time) for record in records]

        # WHEN
        format_bottom_up(records, include_url=True, sort=True)

        # THEN
        assert [(record.self_time, record.total_time) for record in records] == before
