"""Static metadata describing TestGenie."""

APP_NAME = "TestGenie"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "TestGenie is a desktop quiz client built with Qt. "
    "Generate quizzes on any subject, take them one question at a time with instant feedback, "
    "review your results and see how you rank on the leaderboard."
)

HELP_TEXT = (
    "Create a quiz from the Create Quiz screen by picking a subject (or typing your own), "
    "the number of questions and a difficulty.\n\n"
    "While taking a quiz, choosing an option reveals the correct answer immediately and locks "
    "your choice for that question. Use Next to move on; Finish becomes available once every "
    "question has been answered.\n\n"
    "Completed quizzes can be retaken from the results screen with Try Again."
)
