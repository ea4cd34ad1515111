from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import BasePermission
from django.utils import timezone
from core.models import AuthToken


class HasValidToken(BasePermission):
    def has_permission(self, request, view):
        if request.auth is None:
            raise AuthenticationFailed('Token not found')
        if not request.auth.is_active:
            raise AuthenticationFailed('Token is deactivated')

        if request.auth.expires_at < timezone.now():
            request.auth.is_active = False
            request.auth.save(update_fields=['is_active'])
            raise AuthenticationFailed('Token has expired')
        if not request.user.is_active:
            raise AuthenticationFailed('User is inactive')
        return bool(request.user and request.auth)


class IsOwner(BasePermission):
    def has_object_permission(self, request, view, obj):
        owner_id = getattr(obj, 'user_id', None)
        if owner_id is None and hasattr(obj, 'goal'):
            owner_id = obj.goal.user_id
        return owner_id == request.user.id


class TokenAuthentication(BaseAuthentication):
    keyword = 'Token'

    def authenticate(self, request):
        token_key = request.headers.get('Authorization', '')

        if not token_key:
            return None

        if token_key.startswith(f'{self.keyword} '):
            token_key = token_key[len(self.keyword) + 1:].strip()

        try:
            token = AuthToken.objects.select_related('user').get(key=token_key)
        except AuthToken.DoesNotExist:
            raise AuthenticationFailed('Invalid token')

        token.last_used_at = timezone.now()
        token.save(update_fields=['last_used_at'])

        return token.user, token

    def authenticate_header(self, request):
        return self.keyword
