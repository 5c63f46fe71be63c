from rest_framework import serializers
from .models import Company, Profile


class CompanySerializer(serializers.ModelSerializer):
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Company
        fields = ['id', 'name', 'company_code', 'created_by', 'created_at', 'member_count']
        read_only_fields = ['company_code', 'created_by', 'created_at']

    def get_member_count(self, obj):
        return obj.members.count()


class CompanyCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Şirket adı boş olamaz.')
        return value


class CompanyJoinSerializer(serializers.Serializer):
    company_code = serializers.CharField(max_length=20)


class ProfileSerializer(serializers.ModelSerializer):
    company_name = serializers.CharField(source='company.name', read_only=True, default=None)

    class Meta:
        model = Profile
        fields = ['id', 'user', 'email', 'full_name', 'avatar_url', 'company', 'company_name', 'created_at', 'updated_at']
        read_only_fields = ['user', 'email', 'company', 'created_at', 'updated_at']
