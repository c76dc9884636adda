import enum


class Weekday(str, enum.Enum):
    Monday = "Monday"
    Tuesday = "Tuesday"
    Wednesday = "Wednesday"
    Thursday = "Thursday"
    Friday = "Friday"


class ShiftTime(str, enum.Enum):
    morning = "morning"
    evening = "evening"


class ShiftRole(str, enum.Enum):
    manager = "manager"
    volunteer = "volunteer"


# Seats per slot, managers included
SHIFT_CAPACITY = {
    ShiftTime.morning: 5,
    ShiftTime.evening: 6,
}

# Display / sort order: Monday morning, Monday evening, Tuesday morning, ...
SHIFT_DAYS = list(Weekday)
SHIFT_TIMES = [ShiftTime.morning, ShiftTime.evening]


def capacity_for(shift_time: ShiftTime) -> int:
    return SHIFT_CAPACITY[ShiftTime(shift_time)]


def all_slots() -> list[tuple[Weekday, ShiftTime]]:
    return [(day, shift_time) for day in SHIFT_DAYS for shift_time in SHIFT_TIMES]
