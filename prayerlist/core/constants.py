"""Global constants for the prayerlist application."""

# Firestore collections
USERS_COLLECTION = "users"
GROUPS_COLLECTION = "groups"
GROUP_MEMBERS_COLLECTION = "group_members"
GROUP_MESSAGES_COLLECTION = "group_messages"
PRAYER_REQUESTS_COLLECTION = "prayer_requests"
PRAYER_COMMITMENTS_COLLECTION = "prayer_commitments"
PRAYER_REQUEST_REPORTS_COLLECTION = "prayer_request_reports"
FEEDBACK_COLLECTION = "feedback"

# Firestore caps a write batch at 500 operations
FIRESTORE_BATCH_LIMIT = 400

# Group join codes
GROUP_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
GROUP_CODE_MIN_LENGTH = 6
GROUP_CODE_MAX_LENGTH = 8
GROUP_CODE_MAX_ATTEMPTS = 10

# Membership roles
ROLE_MEMBER = "member"
ROLE_ADMIN = "admin"

# Prayer request moderation status
STATUS_ACTIVE = "active"
STATUS_UNDER_REVIEW = "under_review"
STATUS_REVIEWED = "reviewed"
