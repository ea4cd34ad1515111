from rest_framework import serializers
from .models import User
from .validators import validate_email_is_free, validate_password


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id', 'email', 'username',
            'is_active', 'last_login', 'created_at', 'updated_at'
        ]


class UserCreateSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(max_length=255)
    username = serializers.CharField(min_length=2, max_length=50, trim_whitespace=True)
    password = serializers.CharField(
        write_only=True,
        max_length=100
    )
    confirm_password = serializers.CharField(
        write_only=True,
        max_length=100
    )

    class Meta:
        model = User
        fields = [
            'id', 'email', 'username', 'password', 'confirm_password'
        ]

    def validate_email(self, value):
        return value.strip().lower()

    def validate(self, data):
        validate_password(data['password'], data['confirm_password'])
        validate_email_is_free(data['email'])
        return data

    def create(self, validated_data):
        validated_data.pop('confirm_password')
        password = validated_data.pop('password')
        user = User(**validated_data)

        user.set_password(password)

        user.save()
        return user

    def to_representation(self, instance):
        return UserSerializer(instance, context=self.context).data


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        style={'input_type': 'password'},
        write_only=True
    )

    def validate(self, data):
        email = data.get('email', '').strip().lower()
        password = data.get('password')

        user = User.objects.filter(email__iexact=email).first()

        if user is None or not user.check_password(password):
            raise serializers.ValidationError('Invalid email or password')

        if not user.is_active:
            raise serializers.ValidationError('User is inactive')

        data['user'] = user
        return data


class LoginResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    token = serializers.CharField()
    expires_at = serializers.DateTimeField()
    user = UserSerializer()
