import enum


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# A booking in one of these states blocks another booking on the same date.
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.APPROVED.value,
    BookingStatus.PENDING.value,
    BookingStatus.ASSIGNED.value,
)

# Bookings the customer can pay for once the back office has set a price.
PAYABLE_BOOKING_STATUSES = (
    BookingStatus.APPROVED.value,
    BookingStatus.ASSIGNED.value,
)


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class PaymentRecordStatus(str, enum.Enum):
    COMPLETED = "completed"


class NotificationType(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class TicketStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UserRole(str, enum.Enum):
    CUSTOMER = "customer"
    CLEANER = "cleaner"
    ADMIN = "admin"
