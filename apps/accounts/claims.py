"""
Decoded credential claims.

Every request into the supply API is identified by the claim set carried in
its bearer token rather than by a database user lookup. ``Claims`` is the one
typed shape the rest of the code base consumes.
"""
from dataclasses import dataclass, field

from .models import Role, FRANCHISE_ROLES, KITCHEN_ROLES


class InvalidClaimsError(ValueError):
    """Raised when a token payload lacks the claims the API needs."""
    pass


@dataclass(frozen=True)
class Claims:
    user_id: str
    role: str
    name: str = ''
    franchise_id: str = ''
    vendor_id: str = ''
    employee_id: str = ''
    exp: int = 0
    franchise_name: str = field(default='', compare=False)

    # DRF treats request.user as an authenticated principal
    is_authenticated = True
    is_anonymous = False

    @classmethod
    def from_payload(cls, payload):
        """Build claims from a decoded token payload."""
        user_id = payload.get('userId')
        role = payload.get('role')
        if not user_id or not role:
            raise InvalidClaimsError('Token is missing userId or role')
        if role not in Role.values:
            raise InvalidClaimsError(f'Unknown role: {role}')

        return cls(
            user_id=str(user_id),
            role=role,
            name=payload.get('name') or '',
            franchise_id=payload.get('franchise_id') or '',
            vendor_id=payload.get('vendor_id') or '',
            employee_id=payload.get('employee_id') or '',
            exp=int(payload.get('exp') or 0),
            franchise_name=payload.get('franchise_name') or '',
        )

    @property
    def is_franchise(self):
        return self.role in FRANCHISE_ROLES

    @property
    def is_kitchen(self):
        return self.role in KITCHEN_ROLES

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def kitchen_identity(self):
        """Vendor id a kitchen user acts for, falling back to the user id."""
        return self.vendor_id or self.user_id
