import unittest
from hours.domain.DayPlan import DayPlan
from hours.domain.Shift import Shift
from hours.domain.TimeRange import TimeRange
from hours.domain.WeekPlan import WeekPlan
from hours.domain.Weekday import Weekday
from hours.utilities.errors import IncompleteWeekError


class TestDayPlan(unittest.TestCase):

    def test_enabling_empty_day_inserts_lunch(self):
        day = DayPlan().toggle_enabled()
        self.assertTrue(day.enabled)
        self.assertEqual([s.name for s in day.shifts], ["Lunch"])
        self.assertEqual(str(day.shifts[0].range), "13:00-16:00")

    def test_disabling_keeps_shifts(self):
        day = DayPlan().toggle_enabled().toggle_enabled()
        self.assertFalse(day.enabled)
        self.assertEqual(len(day.shifts), 1)
        self.assertFalse(day.is_open_for_service)

    def test_add_shift_sorts_and_enables(self):
        day = DayPlan().add_shift("Dinner").add_shift("Breakfast")
        self.assertTrue(day.enabled)
        self.assertEqual([s.name for s in day.shifts], ["Breakfast", "Dinner"])

    def test_add_same_template_twice_gives_distinct_ids(self):
        day = DayPlan().add_shift("Lunch").add_shift("Lunch")
        self.assertEqual(len(day.shift_ids), 2)

    def test_add_custom_shift_gets_fresh_id(self):
        brunch = Shift.custom("x", "Brunch", TimeRange.parse("10:00-13:00"), label="🥐")
        day = DayPlan().add_shift(brunch, id_prefix="Lunes")
        self.assertNotEqual(day.shifts[0].id, "x")
        self.assertTrue(day.shifts[0].id.startswith("Lunes-"))
        self.assertTrue(day.shifts[0].is_custom)

    def test_unknown_template_falls_back_to_lunch(self):
        day = DayPlan().add_shift("Tea time")
        self.assertEqual(day.shifts[0].name, "Lunch")

    def test_update_start_resorts(self):
        day = DayPlan().add_shift("Breakfast").add_shift("Dinner")
        breakfast = day.shifts[0]
        day = day.update_shift(breakfast.id, start="21:00", end="23:00")
        self.assertEqual([s.name for s in day.shifts], ["Dinner", "Breakfast"])
        self.assertEqual(str(day.get_shift(breakfast.id).range), "21:00-23:00")

    def test_update_unknown_shift_is_noop(self):
        day = DayPlan().add_shift("Lunch")
        self.assertIs(day.update_shift("missing", name="X"), day)

    def test_removing_last_shift_disables_day(self):
        day = DayPlan().add_shift("Lunch")
        day = day.remove_shift(day.shifts[0].id)
        self.assertFalse(day.enabled)
        self.assertEqual(day.shifts, ())

    def test_duplicate_ids_rejected(self):
        lunch = Shift.from_template("Lunch", "a")
        with self.assertRaises(ValueError):
            DayPlan(True, None, (lunch, lunch))

    def test_mutators_do_not_modify_original(self):
        day = DayPlan()
        day.add_shift("Lunch")
        self.assertEqual(day.shifts, ())

    def test_dict_round_trip_keeps_venue_hours(self):
        day = DayPlan().add_shift("Lunch").with_venue_range(TimeRange.parse("12:00-17:00"))
        data = day.to_dict()
        self.assertEqual(data["openTime"], "12:00")
        self.assertEqual(DayPlan.from_dict(data), day)


class TestWeekPlan(unittest.TestCase):

    def test_needs_seven_days(self):
        with self.assertRaises(IncompleteWeekError):
            WeekPlan((DayPlan(),) * 6)

    def test_with_day_replaces_only_that_day(self):
        week = WeekPlan.closed().with_day(Weekday.FRIDAY, DayPlan().add_shift("Dinner"))
        self.assertTrue(week[Weekday.FRIDAY].enabled)
        self.assertFalse(week[Weekday.THURSDAY].enabled)


class TestWeekday(unittest.TestCase):

    def test_from_key_accepts_spanish_and_english(self):
        self.assertEqual(Weekday.from_key("Miércoles"), Weekday.WEDNESDAY)
        self.assertEqual(Weekday.from_key("miercoles"), Weekday.WEDNESDAY)
        self.assertEqual(Weekday.from_key("Saturday"), Weekday.SATURDAY)
        with self.assertRaises(ValueError):
            Weekday.from_key("Funday")

    def test_next_wraps(self):
        self.assertEqual(Weekday.SUNDAY.next(), Weekday.MONDAY)
        self.assertEqual(Weekday.MONDAY.previous(), Weekday.SUNDAY)


if __name__ == '__main__':
    unittest.main()
