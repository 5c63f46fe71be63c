from django.contrib import admin
from .models import Company, Profile


class ProfileInline(admin.TabularInline):
    model = Profile
    fields = ['user', 'full_name', 'email']
    readonly_fields = ['user', 'email']
    extra = 0


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'company_code', 'created_by', 'created_at']
    search_fields = ['name', 'company_code']
    ordering = ['name']
    readonly_fields = ['created_at']
    inlines = [ProfileInline]


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'full_name', 'email', 'company', 'updated_at']
    list_filter = ['company']
    search_fields = ['full_name', 'email', 'user__email']
