import datetime
import secrets

from django.conf import settings
from django.db import models
from django.core.validators import MinLengthValidator
from django.utils import timezone
import bcrypt


class User(models.Model):
    class Meta:
        db_table = 'users'

    id = models.BigAutoField(primary_key=True)

    email = models.EmailField(
        'Email',
        max_length=255,
        unique=True
    )

    username = models.CharField(
        'Username',
        max_length=50,
        validators=[MinLengthValidator(2)]
    )

    password_hash = models.CharField(
        'Password hash',
        max_length=255,
        help_text='BCrypt password hash'
    )

    is_active = models.BooleanField('Active', default=True)
    last_login = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField('Created', auto_now_add=True)
    updated_at = models.DateTimeField('Updated', auto_now=True)

    def set_password(self, raw_password):
        salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        self.password_hash = bcrypt.hashpw(
            raw_password.encode('utf-8'),
            salt
        ).decode('utf-8')

    def check_password(self, raw_password):
        if not self.password_hash:
            return False
        return bcrypt.checkpw(
            raw_password.encode('utf-8'),
            self.password_hash.encode('utf-8')
        )


class AuthToken(models.Model):
    key = models.CharField(
        primary_key=True,
        max_length=64,
        default=secrets.token_hex,
        editable=False
    )

    user = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='auth_tokens'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()
    last_used_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'auth_tokens'

    @classmethod
    def create_token(cls, user, expires_hours=None):
        if expires_hours is None:
            expires_hours = settings.AUTH_TOKEN_TTL_HOURS

        token = cls(
            user=user,
            expires_at=timezone.now() + datetime.timedelta(hours=expires_hours)
        )
        token.save()
        return token

    def is_valid(self):
        return self.is_active and self.expires_at > timezone.now()
