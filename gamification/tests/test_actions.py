from decimal import Decimal

from django.test import SimpleTestCase

from gamification.actions import (
    HoursLogged,
    ProjectCompleted,
    TaskCompleted,
    UnknownAction,
    parse_action,
)


class ParseActionTest(SimpleTestCase):
    def test_known_tags_map_to_variants(self):
        self.assertEqual(parse_action("task_completed", {}), TaskCompleted())
        self.assertEqual(
            parse_action("hours_logged", {"hour": 7, "hours": "2.5"}),
            HoursLogged(hour=7, hours=Decimal("2.5")),
        )
        self.assertEqual(
            parse_action("project_completed", {"projectId": "12"}),
            ProjectCompleted(project_id=12),
        )

    def test_unknown_tag(self):
        action = parse_action("nonexistent_action", {})

        self.assertIsInstance(action, UnknownAction)
        self.assertEqual(action.tag, "nonexistent_action")

    def test_malformed_metadata_becomes_none(self):
        self.assertEqual(
            parse_action("hours_logged", {"hour": "soon", "hours": "lots"}),
            HoursLogged(hour=None, hours=None),
        )
        self.assertEqual(parse_action("hours_logged", {"hour": 24}).hour, None)
        self.assertEqual(parse_action("hours_logged", {"hour": 7.5}).hour, None)
        self.assertEqual(parse_action("hours_logged", {"hours": -1}).hours, None)
        self.assertEqual(parse_action("hours_logged", {"hours": "NaN"}).hours, None)
        self.assertEqual(parse_action("hours_logged", {"hours": 1e8}).hours, None)
        self.assertEqual(
            parse_action("hours_logged", {"hours": "99999999.99"}).hours, Decimal("99999999.99")
        )
        self.assertEqual(parse_action("project_completed", {"projectId": True}).project_id, None)

    def test_missing_or_non_dict_metadata(self):
        self.assertEqual(parse_action("hours_logged", None), HoursLogged())
        self.assertEqual(parse_action("hours_logged", ["hour", 7]), HoursLogged())
        self.assertEqual(parse_action("project_completed"), ProjectCompleted())

    def test_midnight_hour_is_kept(self):
        self.assertEqual(parse_action("hours_logged", {"hour": 0}).hour, 0)
