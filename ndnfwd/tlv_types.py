"""TLV type numbers for NDN packets and management."""

# Packet types
INTEREST = 0x05
DATA = 0x06

# Name and components
NAME = 0x07
IMPLICIT_SHA256_DIGEST_COMPONENT = 0x01
PARAMETERS_SHA256_DIGEST_COMPONENT = 0x02
GENERIC_NAME_COMPONENT = 0x08
KEYWORD_NAME_COMPONENT = 0x20
SEGMENT_NAME_COMPONENT = 0x21
BYTE_OFFSET_NAME_COMPONENT = 0x22
VERSION_NAME_COMPONENT = 0x23
TIMESTAMP_NAME_COMPONENT = 0x24
SEQUENCE_NUM_NAME_COMPONENT = 0x25

# Interest packets
CAN_BE_PREFIX = 0x21
MUST_BE_FRESH = 0x12
FORWARDING_HINT = 0x1E
NONCE = 0x0A
INTEREST_LIFETIME = 0x0C
HOP_LIMIT = 0x22
APPLICATION_PARAMETERS = 0x24
INTEREST_SIGNATURE_INFO = 0x2C
INTEREST_SIGNATURE_VALUE = 0x2E

# Data packets
META_INFO = 0x14
CONTENT = 0x15
SIGNATURE_INFO = 0x16
SIGNATURE_VALUE = 0x17

# Data/MetaInfo
CONTENT_TYPE = 0x18
FRESHNESS_PERIOD = 0x19
FINAL_BLOCK_ID = 0x1A

# Signature
SIGNATURE_TYPE = 0x1B
KEY_LOCATOR = 0x1C
KEY_DIGEST = 0x1D
SIGNATURE_NONCE = 0x26
SIGNATURE_TIME = 0x28
SIGNATURE_SEQ_NUM = 0x2A

# Link object
DELEGATION = 0x1F
PREFERENCE = 0x1E

# Certificates
VALIDITY_PERIOD = 0xFD
NOT_BEFORE = 0xFE
NOT_AFTER = 0xFF
ADDITIONAL_DESCRIPTION = 0x0102
DESCRIPTION_ENTRY = 0x0200
DESCRIPTION_KEY = 0x0201
DESCRIPTION_VALUE = 0x0202

# Management: core
CONTROL_PARAMETERS = 0x68
FACE_ID = 0x69
URI = 0x72
LOCAL_URI = 0x81
ORIGIN = 0x6F
COST = 0x6A
CAPACITY = 0x83
COUNT = 0x84
BASE_CONGESTION_MARKING_INTERVAL = 0x87
DEFAULT_CONGESTION_THRESHOLD = 0x88
MTU = 0x89
FLAGS = 0x6C
MASK = 0x70
STRATEGY = 0x6B
EXPIRATION_PERIOD = 0x6D
CONTROL_RESPONSE = 0x65
STATUS_CODE = 0x66
STATUS_TEXT = 0x67

# Management: forwarder status
NFD_VERSION = 0x80
START_TIMESTAMP = 0x81
CURRENT_TIMESTAMP = 0x82
N_NAME_TREE_ENTRIES = 0x83
N_FIB_ENTRIES = 0x84
N_PIT_ENTRIES = 0x85
N_MEASUREMENT_ENTRIES = 0x86
N_CS_ENTRIES = 0x87
N_IN_INTERESTS = 0x90
N_IN_DATA = 0x91
N_IN_NACKS = 0x97
N_OUT_INTERESTS = 0x92
N_OUT_DATA = 0x93
N_OUT_NACKS = 0x98
N_SATISFIED_INTERESTS = 0x99
N_UNSATISFIED_INTERESTS = 0x9A

# Management: faces
FACE_STATUS = 0x80
CHANNEL_STATUS = 0x82
URI_SCHEME = 0x83
FACE_SCOPE = 0x84
FACE_PERSISTENCY = 0x85
LINK_TYPE = 0x86
N_IN_BYTES = 0x94
N_OUT_BYTES = 0x95
FACE_QUERY_FILTER = 0x96
FACE_EVENT_NOTIFICATION = 0xC0
FACE_EVENT_KIND = 0xC1

# Management: FIB
FIB_ENTRY = 0x80
NEXT_HOP_RECORD = 0x81

# Management: content store
CS_INFO = 0x80
N_HITS = 0x81
N_MISSES = 0x82

# Management: strategy choice
STRATEGY_CHOICE = 0x80

# Management: measurements
MEASUREMENT_ENTRY = 0x80
STRATEGY_INFO = 0x81

# Management: RIB
RIB_ENTRY = 0x80
ROUTE = 0x81


def is_critical(tlv_type: int) -> bool:
    """Return whether a TLV type is critical."""
    if tlv_type < 0x20:
        return True
    return tlv_type & 0x1 == 1