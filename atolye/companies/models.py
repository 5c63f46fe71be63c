from django.conf import settings
from django.db import models


class Company(models.Model):
    """Tenant grouping; members join with the shareable company code"""
    name = models.CharField(max_length=200)
    company_code = models.CharField(max_length=20, unique=True, db_index=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='created_companies')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.name} ({self.company_code})"

    def save(self, *args, **kwargs):
        if self.company_code:
            self.company_code = self.company_code.strip().upper()
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'companies'
        verbose_name_plural = 'companies'


class Profile(models.Model):
    """Per-user profile holding the company membership"""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profile')
    email = models.EmailField(blank=True, null=True)
    full_name = models.CharField(max_length=200, blank=True, null=True)
    avatar_url = models.URLField(blank=True, null=True)
    company = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='members')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.full_name or self.email or f"Profile-{self.pk}"

    class Meta:
        db_table = 'profiles'
