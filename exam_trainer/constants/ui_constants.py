"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Exam Trainer"
WINDOW_MIN_WIDTH: int = 1000
WINDOW_MIN_HEIGHT: int = 720
TIMER_REFRESH_INTERVAL_MS: int = 1000

NAV_BUTTON_SETUP: str = "New Exam"
NAV_BUTTON_HISTORY: str = "Exam History"
NAV_BUTTON_MISTAKES: str = "Mistake Review"
NAV_BUTTON_CLEAR_DATA: str = "Clear All Data"
NAV_BUTTON_ABOUT: str = "About"
NAV_BUTTON_HELP: str = "Help"

SETUP_HEADING: str = "Configure your exam"
SETUP_START_LABEL: str = "Start question"
SETUP_END_LABEL: str = "End question"
SETUP_MODE_PRACTICE: str = "Practice mode (instant feedback)"
SETUP_MODE_EXAM: str = "Exam mode (no auto-advance, no going back)"
SETUP_START_BUTTON: str = "Start Exam"
SETUP_RESUME_BUTTON: str = "Resume Exam"
SETUP_QUICK_START_TITLE: str = "Quick start"
SETUP_BANK_TEMPLATE: str = "{count} questions available in the bank"

EXAM_SUBMIT_BUTTON: str = "Submit Answer"
EXAM_NEXT_BUTTON: str = "Next Question"
EXAM_COMPLETE_BUTTON: str = "Complete Exam"
EXAM_PREVIOUS_BUTTON: str = "Previous"
EXAM_PAUSE_BUTTON: str = "Pause Exam"
EXAM_EXIT_BUTTON: str = "Exit Exam"
EXAM_FINISH_PRACTICE_BUTTON: str = "Finish Practice"
EXAM_MULTIPLE_CHOICE_HINT: str = "Multiple choice: select all correct options."
EXAM_WRONG_FEEDBACK: str = "Incorrect! Correct answer(s): {answers}"
EXAM_AUTO_ADVANCE_HINT: str = "Auto-advancing..."
EXAM_PRACTICE_COMPLETED: str = "Practice completed! Excellent work!"
EXAM_NEXT_HINT: str = "Click \"Next Question\" to continue"
EXAM_NAVIGATION_TITLE: str = "Questions"

RESULTS_PASSED: str = "Passed"
RESULTS_FAILED: str = "Failed"
RESULTS_RETAKE_BUTTON: str = "Retake"
RESULTS_OVERVIEW_BUTTON: str = "Question Overview"
RESULTS_BACK_BUTTON: str = "Back to Setup"

OVERVIEW_BACK_BUTTON: str = "Back to Results"
OVERVIEW_ALL_CATEGORIES: str = "All categories"

HISTORY_EMPTY_MESSAGE: str = "No exams completed yet."
MISTAKES_EMPTY_MESSAGE: str = "No mistakes recorded yet. Keep practicing!"
MISTAKES_PRACTICE_BUTTON: str = "Practice Question"
BACK_BUTTON: str = "Back"

EXAM_LOAD_ERROR_TITLE: str = "Invalid exam settings"
