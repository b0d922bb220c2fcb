"""
niceowner Core - The Owner container.

- Owner: single-slot container that lends out full ownership of its value
- Loan: handle yielded by Owner.lend()
- Errors: OwnerError, EmptyOwnerError, OccupiedOwnerError, OwnerContractError
"""

__all__ = []
