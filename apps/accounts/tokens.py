"""Access-token minting for local tooling and tests."""
from rest_framework_simplejwt.tokens import AccessToken


def issue_access_token(user):
    """
    Mint a signed access token carrying the supply claim set for ``user``.

    Args:
        user: accounts.User instance

    Returns:
        AccessToken with userId, role, name, franchise and vendor claims
    """
    token = AccessToken.for_user(user)
    token['role'] = user.role
    token['name'] = user.get_display_name()
    token['email'] = user.email
    token['franchise_id'] = str(user.franchise_id) if user.franchise_id else ''
    token['franchise_name'] = user.franchise.name if user.franchise_id else ''
    token['vendor_id'] = str(user.vendor_id) if user.vendor_id else ''
    token['employee_id'] = user.employee_id
    return token
