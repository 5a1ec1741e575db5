"""
Typed Exception Hierarchy for the Pizzeria Kernel.

Every failure the order placement engine can report has its own exception
class carrying a machine-readable ``code`` and structured attributes, so a
caller branches on type or code, never on message text.

    PizzeriaKernelError (base)
    |
    +-- OrderRequestError
    |   +-- InvalidOrderRequestError
    |
    +-- NotFoundError
    |   +-- CustomerNotFoundError
    |   +-- MenuItemNotFoundError
    |   +-- OrderNotFoundError
    |
    +-- InventoryError
    |   +-- MissingIngredientError
    |   +-- InsufficientStockError
    |
    +-- CourierError
    |   +-- NoCourierAvailableError
    |
    +-- ConcurrencyError
        +-- PlacementConflictError

Category        | Code                  | When Raised
----------------|-----------------------|------------------------------------------
Request         | INVALID_REQUEST       | Empty item list, quantity <= 0
----------------|-----------------------|------------------------------------------
Not found       | CUSTOMER_NOT_FOUND    | Customer id does not resolve
                | MENU_ITEM_NOT_FOUND   | One or more requested items do not resolve
                | ORDER_NOT_FOUND       | Order id does not resolve (read side)
----------------|-----------------------|------------------------------------------
Inventory       | MISSING_INGREDIENT    | Bill-of-materials names a deleted ingredient
                | INSUFFICIENT_STOCK    | Demand exceeds stock-on-hand
----------------|-----------------------|------------------------------------------
Courier         | NO_COURIER_AVAILABLE  | No courier in the available state
----------------|-----------------------|------------------------------------------
Concurrency     | CONFLICT              | The transaction could not commit

Error categories let callers react by group:
    NotFoundError     -> fix the request
    InventoryError    -> offer a different item or wait for restock
    ConcurrencyError  -> retry the placement
"""

from uuid import UUID


class PizzeriaKernelError(Exception):
    """
    Base exception for all pizzeria kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PIZZERIA_KERNEL_ERROR"


# Request validation


class OrderRequestError(PizzeriaKernelError):
    """Base exception for malformed placement requests."""

    code: str = "ORDER_REQUEST_ERROR"


class InvalidOrderRequestError(OrderRequestError):
    """The placement request is structurally invalid."""

    code: str = "INVALID_REQUEST"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid order request: {reason}")


# Resolution failures


class NotFoundError(PizzeriaKernelError):
    """Base exception for identities that do not resolve."""

    code: str = "NOT_FOUND"


class CustomerNotFoundError(NotFoundError):
    """Customer with given ID was not found."""

    code: str = "CUSTOMER_NOT_FOUND"

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Customer not found: {customer_id}")


class MenuItemNotFoundError(NotFoundError):
    """
    One or more requested menu items were not found.

    The whole placement aborts; there are no partial orders.
    """

    code: str = "MENU_ITEM_NOT_FOUND"

    def __init__(self, missing_ids: list[str]):
        self.missing_ids = missing_ids
        super().__init__(f"Menu item(s) not found: {', '.join(missing_ids)}")


class OrderNotFoundError(NotFoundError):
    """Order with given ID was not found."""

    code: str = "ORDER_NOT_FOUND"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


# Inventory failures


class InventoryError(PizzeriaKernelError):
    """Base exception for inventory-related errors."""

    code: str = "INVENTORY_ERROR"


class MissingIngredientError(InventoryError):
    """A bill-of-materials references an ingredient that no longer exists."""

    code: str = "MISSING_INGREDIENT"

    def __init__(self, missing_ids: list[str]):
        self.missing_ids = missing_ids
        super().__init__(
            f"Required ingredient(s) do not exist: {', '.join(missing_ids)}"
        )


class InsufficientStockError(InventoryError):
    """Aggregated demand for an ingredient exceeds its stock-on-hand."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        ingredient_id: UUID | str,
        ingredient_name: str,
        needed: int,
        available: int,
    ):
        self.ingredient_id = str(ingredient_id)
        self.ingredient_name = ingredient_name
        self.needed = needed
        self.available = available
        super().__init__(
            f'Ingredient "{ingredient_name}" has insufficient stock. '
            f"Needs {needed}, has {available}"
        )


# Courier failures


class CourierError(PizzeriaKernelError):
    """Base exception for courier-related errors."""

    code: str = "COURIER_ERROR"


class NoCourierAvailableError(CourierError):
    """No courier is in the available state at reservation time."""

    code: str = "NO_COURIER_AVAILABLE"

    def __init__(self) -> None:
        super().__init__("No courier available; the order could not be completed")


# Concurrency


class ConcurrencyError(PizzeriaKernelError):
    """Base exception for concurrency-related errors."""

    code: str = "CONCURRENCY_ERROR"


class PlacementConflictError(ConcurrencyError):
    """
    The placement transaction could not commit.

    Raised after the bounded retry budget is spent on store-detected
    contention, or when the store rejects the unit for a non-retryable reason.
    """

    code: str = "CONFLICT"

    def __init__(self, attempts: int, detail: str):
        self.attempts = attempts
        self.detail = detail
        super().__init__(
            f"Order placement could not commit after {attempts} attempt(s): {detail}"
        )
