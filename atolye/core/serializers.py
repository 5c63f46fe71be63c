from rest_framework import serializers
from rest_framework.validators import UniqueValidator
from django.contrib.auth.password_validation import validate_password
from .models import User, AuditLog


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'phone', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['username', 'email', 'is_active', 'created_at', 'updated_at']


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(
        validators=[UniqueValidator(queryset=User.objects.all(), lookup='iexact',
                                    message='Bu e-posta adresi zaten kayıtlı.')]
    )
    password = serializers.CharField(write_only=True, validators=[validate_password])
    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True)

    def validate_email(self, value):
        return value.strip().lower()

    def create(self, validated_data):
        email = validated_data['email']
        user = User.objects.create_user(
            username=email[:150],
            email=email,
            password=validated_data['password'],
        )
        # Profile is created by the post_save signal of the companies app
        full_name = validated_data.get('full_name', '').strip()
        if full_name:
            user.profile.full_name = full_name
            user.profile.save(update_fields=['full_name', 'updated_at'])
        return user


class AuditLogSerializer(serializers.ModelSerializer):
    user_email = serializers.CharField(source='user.email', read_only=True, default=None)

    class Meta:
        model = AuditLog
        fields = ['id', 'user', 'user_email', 'action', 'model_name', 'object_id', 'object_name',
                  'changes', 'ip_address', 'created_at']


class CompanyScopedPrimaryKeyRelatedField(serializers.PrimaryKeyRelatedField):
    """Primary key field that only accepts objects of the company in the serializer context"""

    def get_queryset(self):
        queryset = super().get_queryset()
        company = self.context.get('company')
        if company is None:
            return queryset.none()
        return queryset.filter(company=company)
