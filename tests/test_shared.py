import unittest
from datetime import datetime
from unittest.mock import MagicMock, mock_open, patch

from activitycal.shared import (
    Activity,
    parse_activity,
    query_activity,
    read_activity_file,
)


class TestReadActivityFile(unittest.TestCase):
    def setUp(self):
        self.logger = MagicMock()

    @patch("activitycal.shared.os.path.exists")
    @patch("activitycal.shared.os.path.expanduser")
    @patch("builtins.open", new_callable=mock_open, read_data="line1\nline2\n")
    def test_reads_lines(self, mock_file, mock_expanduser, mock_exists):
        mock_expanduser.side_effect = lambda x: x
        mock_exists.return_value = True

        lines = read_activity_file("activity.log", self.logger)

        self.assertEqual(lines, ["line1", "line2"])
        mock_file.assert_called_once_with("activity.log")

    @patch("builtins.print")
    @patch("activitycal.shared.os.path.exists")
    def test_missing_file(self, mock_exists, mock_print):
        mock_exists.return_value = False

        lines = read_activity_file("missing.log", self.logger)

        self.assertEqual(lines, [])
        self.logger.warning.assert_called_once()
        mock_print.assert_called_once()

    @patch("builtins.print")
    @patch("activitycal.shared.os.path.exists")
    @patch("builtins.open", side_effect=PermissionError("denied"))
    def test_unreadable_file(self, mock_file, mock_exists, mock_print):
        mock_exists.return_value = True

        lines = read_activity_file("locked.log", self.logger)

        self.assertEqual(lines, [])
        self.logger.error.assert_called_once()


class TestParseActivity(unittest.TestCase):
    def setUp(self):
        self.logger = MagicMock()

    def test_parse_activity(self):
        lines = [
            "# recorded by hand",
            "",
            "2020-05-30T14:02:11 git",
            "2020-05-30T09:00+02:00 mail   inbox",
            "2020-05-31",
            "   2020-06-01T10:00:00   ",
            "yesterday git",
            "2020-13-01T00:00:00 broken",
        ]

        activities = parse_activity(lines, self.logger)

        self.assertEqual(
            activities,
            [
                Activity(datetime(2020, 5, 30, 14, 2, 11), "git"),
                Activity(datetime(2020, 5, 30, 9, 0), "mail   inbox"),
                Activity(datetime(2020, 5, 31), None),
                Activity(datetime(2020, 6, 1, 10, 0), None),
            ],
        )
        self.assertEqual(self.logger.warning.call_count, 2)

    def test_timezone_is_dropped(self):
        activities = parse_activity(["2020-05-30T23:30:00-05:00"], self.logger)
        self.assertIsNone(activities[0].time.tzinfo)
        self.assertEqual(activities[0].time.date(), datetime(2020, 5, 30).date())

    def test_utc_suffix(self):
        activities = parse_activity(
            ["2020-05-30T22:15:00Z git", "2020-05-31T01:00:00z"], self.logger
        )

        self.assertEqual(
            activities,
            [
                Activity(datetime(2020, 5, 30, 22, 15), "git"),
                Activity(datetime(2020, 5, 31, 1, 0), None),
            ],
        )
        self.logger.warning.assert_not_called()


class TestQueryActivity(unittest.TestCase):
    def setUp(self):
        self.activities = [
            Activity(datetime(2020, 5, 2, 10, 0), "git"),
            Activity(datetime(2020, 4, 30, 23, 59), "git"),
            Activity(datetime(2020, 5, 1, 0, 0), "mail"),
            Activity(datetime(2020, 6, 1, 0, 0), "git"),
            Activity(datetime(2020, 5, 1, 12, 0), "git"),
        ]

    def test_half_open_range_sorted(self):
        selected = query_activity(
            self.activities, datetime(2020, 5, 1), datetime(2020, 6, 1)
        )

        self.assertEqual(
            [activity.time for activity in selected],
            [
                datetime(2020, 5, 1, 0, 0),
                datetime(2020, 5, 1, 12, 0),
                datetime(2020, 5, 2, 10, 0),
            ],
        )

    def test_topic_filter(self):
        selected = query_activity(
            self.activities, datetime(2020, 5, 1), datetime(2020, 6, 1), topic="git"
        )

        self.assertEqual(len(selected), 2)
        self.assertTrue(all(activity.topic == "git" for activity in selected))

    def test_open_upper_bound(self):
        selected = query_activity(self.activities, datetime(2020, 5, 2), None)

        self.assertEqual(
            [activity.time for activity in selected],
            [datetime(2020, 5, 2, 10, 0), datetime(2020, 6, 1, 0, 0)],
        )


if __name__ == "__main__":
    unittest.main()
