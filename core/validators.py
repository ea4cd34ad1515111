from rest_framework import serializers
from .models import User

MIN_PASSWORD_LENGTH = 6


def validate_email_is_free(email):
    if User.objects.filter(email__iexact=email).exists():
        raise serializers.ValidationError({
            'email': 'This email is already registered. Please login instead.'
        })


def validate_password(password, confirm_password):
    if password != confirm_password:
        raise serializers.ValidationError({
            'confirm_password': 'Passwords do not match'
        })
    if len(password) < MIN_PASSWORD_LENGTH:
        raise serializers.ValidationError({
            'password': f'Password must be at least {MIN_PASSWORD_LENGTH} characters'
        })
