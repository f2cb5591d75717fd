from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from app.schemas.booking import (
    BookingCreate,
    BookingOptions,
    BookingView,
    BookCleaningView,
    BookingHistoryView,
    CancelBookingRequest,
    ActiveBookingResponse,
)
from app.schemas.notification import (
    NotificationView,
    MarkReadRequest,
    MarkReadResult,
)
from app.schemas.dashboard import (
    CustomerStats,
    DashboardView,
)
from app.schemas.payment import (
    PayableBooking,
    PaymentCreate,
    MakePaymentView,
)
from app.schemas.profile import (
    ProfileView,
    ProfileUpdate,
    ProfilePage,
)
from app.schemas.support import (
    SupportRequest,
    SupportPage,
)
