"""User-related serializers"""
from rest_framework import serializers
from django.contrib.auth.models import User

from ..models import Profile, SuspendedUser
from ..utils.constants import UserRole


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name"]


class ProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = Profile
        fields = ['user', 'username', 'name', 'first_name', 'last_name', 'phone', 'address', 'birth_date',
                  'photo', 'role', 'credits', 'driver_rating', 'total_reviews', 'created_at']
        read_only_fields = ['role', 'credits', 'driver_rating', 'total_reviews', 'created_at']


class PublicProfileSerializer(serializers.ModelSerializer):
    """What other users may see of a driver or passenger"""
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Profile
        fields = ['user_id', 'username', 'display_name', 'photo', 'driver_rating', 'total_reviews']


class AdminUserSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)
    is_suspended = serializers.BooleanField(read_only=True)

    class Meta:
        model = Profile
        fields = ['user', 'username', 'name', 'role', 'credits', 'is_suspended', 'created_at']


class SuspendedUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = SuspendedUser
        fields = ['user', 'reason', 'suspended_by', 'suspended_at']


class SignUpSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    username = serializers.CharField(max_length=50, required=False)
    name = serializers.CharField(max_length=100, required=False)
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    phone = serializers.CharField(max_length=20, required=False)
    address = serializers.CharField(max_length=150, required=False)
    birth_date = serializers.DateField(required=False)
    photo = serializers.URLField(max_length=300, required=False)
    role = serializers.ChoiceField(choices=UserRole.CHOICES, required=False)


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class RoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=UserRole.CHOICES)


class SuspendUserSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class EmployeeSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, required=False)
    name = serializers.CharField(max_length=100, required=False)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)
