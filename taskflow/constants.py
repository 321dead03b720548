"""Closed value sets and display defaults shared by the server and the board session."""

# Task status
TODO = "TODO"
IN_PROGRESS = "IN_PROGRESS"
DONE = "DONE"

STATUS_MAP = {TODO: "To Do", IN_PROGRESS: "In Progress", DONE: "Done"}
STATUSES = tuple(STATUS_MAP)
COLUMNS = [TODO, IN_PROGRESS, DONE]  # board order, left to right

# Task priority
HIGH = "HIGH"
MEDIUM = "MEDIUM"
LOW = "LOW"

PRIO_MAP = {HIGH: "High", MEDIUM: "Medium", LOW: "Low"}
PRIORITIES = tuple(PRIO_MAP)

# Filter sentinel: no priority restriction
ALL = "ALL"

DEFAULT_STATUS = TODO
DEFAULT_PRIORITY = MEDIUM

PROJECT_COLORS = [
    "#6366F1", "#EC4899", "#F59E0B", "#10B981",
    "#3B82F6", "#8B5CF6", "#EF4444", "#14B8A6",
]
DEFAULT_PROJECT_COLOR = PROJECT_COLORS[0]

# Due-date buckets
OVERDUE = "OVERDUE"
TODAY = "TODAY"
SOON = "SOON"
PLAIN = "PLAIN"

SOON_DAYS = 2
