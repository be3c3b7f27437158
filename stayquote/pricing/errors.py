"""Quote errors surfaced to callers as distinct, user-actionable failures."""


class QuoteError(Exception):
    """Base class for errors that prevent a quote from being produced."""


class RoomNotFoundError(QuoteError):
    def __init__(self, room_id: object) -> None:
        super().__init__(f"Room {room_id} not found")
        self.room_id = room_id


class TenantMismatchError(QuoteError):
    def __init__(self, room_id: object, tenant_id: object) -> None:
        super().__init__(f"Room {room_id} does not belong to tenant {tenant_id}")
        self.room_id = room_id
        self.tenant_id = tenant_id


class InvalidDateRangeError(QuoteError):
    def __init__(self, check_in: object, check_out: object) -> None:
        super().__init__(f"check_out ({check_out}) must be after check_in ({check_in})")
        self.check_in = check_in
        self.check_out = check_out


class RoomInactiveError(QuoteError):
    def __init__(self, room_id: object) -> None:
        super().__init__(f"Room {room_id} is not currently bookable")
        self.room_id = room_id


class CheckoutValidationError(QuoteError):
    """The checkout selection cannot be priced as submitted (capacity, addons, currency)."""


class QuoteMismatchError(QuoteError):
    def __init__(self, submitted: object, computed: object) -> None:
        super().__init__(f"Submitted total {submitted} does not match the quoted total {computed}")
        self.submitted = submitted
        self.computed = computed
