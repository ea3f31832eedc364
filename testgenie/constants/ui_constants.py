"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "TestGenie"
TOAST_DURATION_MS: int = 4000

NAV_DASHBOARD: str = "Dashboard"
NAV_CREATE_QUIZ: str = "Create Quiz"
NAV_LEADERBOARD: str = "Leaderboard"
NAV_PROFILE: str = "Profile"
NAV_SETTINGS: str = "Settings"
NAV_ABOUT: str = "About"
NAV_HELP: str = "Help"
NAV_LOGOUT: str = "Log Out"

LOGIN_TITLE: str = "Welcome back"
REGISTER_TITLE: str = "Create your account"
LOGIN_BUTTON: str = "Log In"
REGISTER_BUTTON: str = "Register"
SWITCH_TO_REGISTER: str = "Need an account? Register"
SWITCH_TO_LOGIN: str = "Already registered? Log in"
FORGOT_PASSWORD_BUTTON: str = "Forgot password?"

TAKE_PREV_BUTTON: str = "Previous"
TAKE_NEXT_BUTTON: str = "Next"
TAKE_FINISH_BUTTON: str = "Finish Quiz"
TAKE_SUBMITTING_LABEL: str = "Submitting…"
TAKE_LOADING_LABEL: str = "Loading quiz…"
TRY_AGAIN_BUTTON: str = "Try Again"
VIEW_RESULTS_BUTTON: str = "View Results"
BACK_TO_DASHBOARD_BUTTON: str = "Back to Dashboard"

DASHBOARD_TAB_MINE: str = "My Quizzes"
DASHBOARD_TAB_ATTEMPTED: str = "Attempted"
DASHBOARD_EMPTY_MINE: str = "No quizzes found. Get started by creating a new quiz."
DASHBOARD_EMPTY_ATTEMPTED: str = "No quizzes found. You haven't attempted any quizzes yet."

CREATE_MODE_SUBJECT: str = "Choose a subject"
CREATE_MODE_CUSTOM: str = "Custom subject"
CREATE_SUBMIT_BUTTON: str = "Generate Quiz"
CREATE_GENERATING_LABEL: str = "Generating quiz… this can take a moment."

LEADERBOARD_EMPTY_MESSAGE: str = "No users found in the leaderboard. Be the first to take a quiz!"
LEADERBOARD_ERROR_MESSAGE: str = "Failed to load leaderboard data. Please try again later."

ALREADY_COMPLETED_INFO: str = (
    "This quiz has already been completed. You can view your results or try again."
)
SESSION_EXPIRED_MESSAGE: str = "Session expired. Please log in again."
