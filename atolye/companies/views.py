import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction

from atolye.core.permissions import HasCompany, get_user_company
from atolye.core.utils import create_audit_log
from .models import Company, Profile
from .serializers import (
    CompanySerializer, CompanyCreateSerializer, CompanyJoinSerializer, ProfileSerializer
)
from .utils import generate_unique_company_code, normalize_company_code

logger = logging.getLogger(__name__)

ALREADY_MEMBER_MESSAGE = 'Zaten bir şirkete üyesiniz.'


def _get_profile(user):
    profile, _ = Profile.objects.get_or_create(user=user, defaults={'email': user.email})
    return profile


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile_detail(request):
    """Retrieve or update the current user's profile"""
    profile = _get_profile(request.user)

    if request.method == 'GET':
        return Response(ProfileSerializer(profile).data)

    serializer = ProfileSerializer(profile, data=request.data, partial=True)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def company_create(request):
    """Create a company with a fresh join code and make the caller its member"""
    profile = _get_profile(request.user)
    if profile.company_id:
        return Response({'error': ALREADY_MEMBER_MESSAGE}, status=status.HTTP_409_CONFLICT)

    serializer = CompanyCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        company = Company.objects.create(
            name=serializer.validated_data['name'],
            company_code=generate_unique_company_code(),
            created_by=request.user,
        )
        profile.company = company
        profile.save(update_fields=['company', 'updated_at'])

    logger.info(f"User {request.user.email} created company {company.id} ({company.company_code})")
    create_audit_log(
        request=request,
        action='company_create',
        model_name='Company',
        object_id=company.id,
        object_name=company.name,
        company=company,
        changes={'company_code': company.company_code},
    )

    return Response({
        'company': CompanySerializer(company).data,
        'message': f'Şirket oluşturuldu. Şirket kodu: {company.company_code}',
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def company_join(request):
    """Join an existing company by its code"""
    profile = _get_profile(request.user)
    if profile.company_id:
        return Response({'error': ALREADY_MEMBER_MESSAGE}, status=status.HTTP_409_CONFLICT)

    serializer = CompanyJoinSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    company_code = normalize_company_code(serializer.validated_data['company_code'])
    company = Company.objects.filter(company_code=company_code).first()
    if company is None:
        logger.info(f"User {request.user.email} tried unknown company code {company_code}")
        return Response({'error': 'Geçersiz şirket kodu.'}, status=status.HTTP_404_NOT_FOUND)

    profile.company = company
    profile.save(update_fields=['company', 'updated_at'])

    logger.info(f"User {request.user.email} joined company {company.id}")
    create_audit_log(
        request=request,
        action='company_join',
        model_name='Company',
        object_id=company.id,
        object_name=company.name,
        company=company,
    )

    return Response({
        'company': CompanySerializer(company).data,
        'message': f'{company.name} şirketine katıldınız.',
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def company_current(request):
    """The caller's company"""
    company = get_user_company(request.user)
    if company is None:
        return Response({'error': 'Şirket bulunamadı.'}, status=status.HTTP_404_NOT_FOUND)
    return Response(CompanySerializer(company).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasCompany])
def company_members(request):
    """Profiles of everyone in the caller's company"""
    company = get_user_company(request.user)
    members = Profile.objects.filter(company=company).select_related('company').order_by('full_name', 'email')
    return Response(ProfileSerializer(members, many=True).data)
