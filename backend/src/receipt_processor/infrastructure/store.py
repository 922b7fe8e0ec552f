"""
In-memory receipt store.

Holds every submitted receipt for the lifetime of the process, keyed by a
random UUID assigned at submission.

Design Decisions:
- One lock guards identifier generation plus insertion; nothing else
  runs inside it
- Lookups are lock-free: a receipt is fully built before the single dict
  assignment that publishes it
- Append-only: there is no update or delete path, so an identifier that
  was handed out always resolves to the same receipt
- No capacity bound; the mapping grows with every submission
"""

import logging
import threading
from dataclasses import replace
from uuid import UUID, uuid4

from receipt_processor.domain.errors import InvalidIdentifierError, ReceiptNotFoundError
from receipt_processor.domain.models import Receipt

logger = logging.getLogger(__name__)


def parse_identifier(identifier: str | UUID) -> UUID:
    """
    Parse a receipt identifier.

    Raises:
        InvalidIdentifierError: If the value is not a well-formed UUID
    """
    if isinstance(identifier, UUID):
        return identifier

    try:
        return UUID(identifier)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifierError(str(identifier))


class ReceiptStore:
    """
    Thread-safe, append-only mapping of identifier to receipt.

    Example:
        store = ReceiptStore()
        receipt_id = store.submit(receipt)
        assert store.lookup(str(receipt_id)) == receipt
    """

    def __init__(self) -> None:
        self._receipts: dict[UUID, Receipt] = {}
        self._lock = threading.Lock()

    def submit(self, receipt: Receipt) -> UUID:
        """
        Assign a new identifier to a receipt and store it.

        Args:
            receipt: Receipt to store. Any id it already carries is replaced.

        Returns:
            The identifier the receipt is now stored under
        """
        with self._lock:
            receipt_id = uuid4()
            while receipt_id in self._receipts:
                receipt_id = uuid4()
            self._receipts[receipt_id] = replace(receipt, id=receipt_id)

        logger.info(f"Stored receipt {receipt_id} from {receipt.retailer!r}")
        return receipt_id

    def lookup(self, identifier: str | UUID) -> Receipt:
        """
        Fetch a previously submitted receipt.

        Raises:
            InvalidIdentifierError: If the identifier is not a UUID
            ReceiptNotFoundError: If this store never issued the identifier
        """
        receipt_id = parse_identifier(identifier)

        receipt = self._receipts.get(receipt_id)
        if receipt is None:
            logger.info(f"Receipt {receipt_id} not found")
            raise ReceiptNotFoundError(str(receipt_id))

        return receipt

    def __contains__(self, identifier: object) -> bool:
        try:
            receipt_id = parse_identifier(identifier)  # type: ignore[arg-type]
        except InvalidIdentifierError:
            return False
        return receipt_id in self._receipts

    def __len__(self) -> int:
        return len(self._receipts)
