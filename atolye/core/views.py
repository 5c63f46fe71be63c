import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError, AuthenticationFailed
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.shortcuts import get_object_or_404
from .models import AuditLog
from .permissions import HasCompany, get_user_company
from .serializers import UserSerializer, RegisterSerializer, AuditLogSerializer
from .utils import parse_date_param, INVALID_DATE_MESSAGE

User = get_user_model()
logger = logging.getLogger(__name__)


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    default_error_messages = {
        'no_active_account': 'Geçersiz e-posta veya şifre.',
    }

    def validate(self, attrs):
        if attrs.get(self.username_field):
            attrs[self.username_field] = attrs[self.username_field].strip().lower()
        data = super().validate(attrs)
        if not self.user.is_active:
            raise AuthenticationFailed('Kullanıcı hesabı devre dışı.')
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['email'] = user.email
        return token


class EmailTokenObtainPairView(TokenObtainPairView):
    serializer_class = EmailTokenObtainPairSerializer


class SafeTokenRefreshSerializer(TokenRefreshSerializer):
    """Token refresh serializer that rejects tokens of deleted users"""
    def validate(self, attrs):
        try:
            return super().validate(attrs)
        except (InvalidToken, TokenError):
            raise InvalidToken('Token geçersiz veya süresi dolmuş.')
        except (ObjectDoesNotExist, User.DoesNotExist):
            raise InvalidToken('Token geçersiz. Kullanıcı artık mevcut değil.')


class SafeTokenRefreshView(TokenRefreshView):
    serializer_class = SafeTokenRefreshSerializer


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """User registration endpoint"""
    serializer = RegisterSerializer(data=request.data)
    if serializer.is_valid():
        user = serializer.save()
        logger.info(f"Registered new user {user.email}")
        token = EmailTokenObtainPairSerializer.get_token(user)
        return Response({
            'user': UserSerializer(user).data,
            'access': str(token.access_token),
            'refresh': str(token),
        }, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Current user with profile and company"""
    from atolye.companies.serializers import ProfileSerializer, CompanySerializer

    user = request.user
    user_data = UserSerializer(user).data
    profile = getattr(user, 'profile', None)
    company = profile.company if profile else None
    user_data['profile'] = ProfileSerializer(profile).data if profile else None
    user_data['company'] = CompanySerializer(company).data if company else None
    user_data['has_company'] = company is not None
    return Response(user_data)


# AuditLog views (read-only)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def audit_log_list(request):
    """List the company's audit logs with filtering"""
    queryset = AuditLog.objects.filter(company=get_user_company(request.user)).select_related('user')

    action_filter = request.query_params.get('action', None)
    if action_filter:
        queryset = queryset.filter(action=action_filter)

    model_filter = request.query_params.get('model', None)
    if model_filter:
        queryset = queryset.filter(model_name=model_filter)

    try:
        date_from = parse_date_param(request.query_params.get('date_from'))
        date_to = parse_date_param(request.query_params.get('date_to'))
    except ValueError:
        return Response({'error': INVALID_DATE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)

    queryset = queryset.order_by('-created_at')
    serializer = AuditLogSerializer(queryset, many=True)
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def audit_log_detail(request, pk):
    """Retrieve an audit log"""
    audit_log = get_object_or_404(AuditLog, pk=pk, company=get_user_company(request.user))
    serializer = AuditLogSerializer(audit_log)
    return Response(serializer.data)
