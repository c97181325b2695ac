"""
Application constants
"""

# Service info (reported by /health)
SERVICE_NAME = "Task API"
SERVICE_VERSION = "1.0.0"

# Document store
TASKS_COLLECTION = "tasks"
FIRESTORE_API_BASE_URL = "https://firestore.googleapis.com"
FIRESTORE_API_VERSION = "v1"
FIRESTORE_PAGE_SIZE = 300

# Task field limits
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000

# Stored timestamp fields: (legacy name, current name)
CREATED_AT_FIELDS = ("createdAt", "firestoreCreatedAt")
UPDATED_AT_FIELDS = ("updatedAt", "firestoreUpdatedAt")
DUE_DATE_FIELDS = ("dueDate", "firestoreDueDate")

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
