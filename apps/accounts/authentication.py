"""
Bearer-token authentication that yields ``Claims`` instead of a User row.

Signature and expiry checks are delegated to djangorestframework-simplejwt;
this class only turns the validated payload into typed claims, once, at the
API boundary.
"""
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from .claims import Claims, InvalidClaimsError


class ClaimsAuthentication(JWTStatelessUserAuthentication):
    """Authenticate requests from the claim set of a signed access token."""

    def get_user(self, validated_token):
        try:
            return Claims.from_payload(validated_token.payload)
        except InvalidClaimsError as e:
            raise InvalidToken({'detail': str(e), 'code': 'invalid_claims'})
