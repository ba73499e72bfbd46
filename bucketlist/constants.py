"""Global constants for the bucketlist application."""

# Firestore collections
USERS_COLLECTION = "users"
BUCKETS_COLLECTION = "buckets"

# Every user owns exactly this many ordered bucket slots
SLOT_COUNT = 4
EMPTY_SLOT = ""
BUCKET_ID_PREFIX = "bucket-"

# Invite-related constants
INVITE_TTL_DAYS = 7
INVITE_CODE_BYTES = 16
JOIN_BUCKET_PATH = "/join-bucket"

# Fields on 'users' documents
USER_EMAIL = "email"
USER_BUCKET_ORDER = "bucketOrder"

# Fields on 'buckets' documents
BUCKET_ID = "bucketId"
BUCKET_TITLE = "bucketTitle"
BUCKET_OWNER_EMAIL = "ownerEmail"
BUCKET_COLLABORATORS = "collaborators"
BUCKET_INVITE_CODE = "inviteCode"
BUCKET_INVITE_EXPIRY = "inviteExpiry"

# Email-related constants
SMTP_AUTH_ERROR_CODE = 534
