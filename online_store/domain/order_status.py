# online_store/domain/order_status.py
# Koszyk ze statusem NULL nie jest jeszcze zamowieniem.
PENDING = "Pending"
APPROVED = "Approved"
REJECTED = "Rejected"

TERMINAL = frozenset({APPROVED, REJECTED})
