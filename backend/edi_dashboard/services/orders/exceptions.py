"""Order domain exceptions."""

from edi_dashboard.services.exceptions import NotFoundError, ValidationError


class OrderNotFound(NotFoundError):
    """Order not found."""

    pass


class InvalidOrderStatus(ValidationError):
    """Requested status is not one of the known order statuses."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid status: {value!r}")
