"""Application-wide constants for hiring analytics."""

# Pipeline stages
FUNNEL_STAGES = ["new", "screening", "interviewing", "offered", "hired", "rejected"]
PROGRESSION_STAGES = ["new", "screening", "interviewing", "offered", "hired"]

INTERVIEW_REACHED_STATUSES = {"interviewing", "offered", "hired"}
ACTIVE_JOB_STATUSES = {"published", "open"}

FETCHED_INTERVIEW_STATUSES = ["scheduled", "confirmed", "completed"]
UPCOMING_INTERVIEW_STATUSES = {"scheduled", "confirmed"}

DEFAULT_APPLICATION_SOURCE = "direct"

SOURCE_DISPLAY_NAMES = {
    "direct": "Direct Application",
    "linkedin": "LinkedIn",
    "indeed": "Indeed",
    "referral": "Employee Referral",
    "agency": "Recruitment Agency",
    "career_fair": "Career Fair",
    "website": "Company Website",
    "other": "Other",
}

# Time-to-hire outlier window (days)
MAX_HIRE_DAYS = 365
SECONDS_PER_DAY = 24 * 60 * 60

# Team activity weighting
INTERVIEW_SCORE_WEIGHT = 10
APPLICATION_SCORE_WEIGHT = 5

# Result sizes
TOP_JOBS_LIMIT = 5
TIME_TO_HIRE_BY_JOB_LIMIT = 10
TEAM_ACTIVITY_LIMIT = 10
RECENT_ITEMS_LIMIT = 10
RECRUITER_JOB_PERFORMANCE_LIMIT = 8
RECRUITER_TREND_MONTHS = 6

# Goal targets
GOAL_TEMPLATES = [
    {"id": "monthly_hires", "title": "Monthly Hires", "target": 10, "unit": "hires"},
    {"id": "interview_pipeline", "title": "Interview Pipeline", "target": 50, "unit": "interviews"},
    {"id": "application_target", "title": "Application Target", "target": 100, "unit": "applications"},
]

PIPELINE_VELOCITY_NOTE = "Not computable without a stage transition log"

# Organization roles
ROLE_LABELS = {
    "hr_manager": "HR Manager",
    "recruiter": "Recruiter",
    "hiring_manager": "Hiring Manager",
    "interviewer": "Interviewer",
}
TRACKED_ROLES = ["hr_manager", "recruiter", "hiring_manager", "interviewer"]

SUPPORTED_LANGUAGES = {"en", "ar"}
DEFAULT_LANGUAGE = "en"
