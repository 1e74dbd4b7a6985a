from django.contrib import admin, messages
from django.utils.html import format_html

from .models import ApiKey, Organization


class ApiKeyInline(admin.TabularInline):

    model = ApiKey
    extra = 0  # Keys are issued from the API Key admin (raw key shown once)
    fields = ['name', 'prefix', 'is_active', 'last_used_at', 'created_at']
    readonly_fields = ['prefix', 'last_used_at', 'created_at']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'slug',
        'status_badge',
        'api_keys_count',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ApiKeyInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug')
        }),
        ('Status', {
            'fields': ('is_active',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):

        if obj.is_active:
            return format_html(
                '<span style="background-color: #28a745; color: white; '
                'padding: 3px 10px; border-radius: 3px; font-size: 11px;">'
                'Active</span>'
            )
        return format_html(
            '<span style="background-color: #dc3545; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">'
            'Inactive</span>'
        )

    status_badge.short_description = 'Status'

    def api_keys_count(self, obj):

        count = obj.get_active_api_keys_count()
        return format_html(
            '<span style="color: #667eea; font-weight: bold;">{} keys</span>',
            count
        )

    api_keys_count.short_description = 'API Keys'


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):

    list_display = ['prefix', 'name', 'organization', 'is_active', 'last_used_at', 'created_at']
    list_filter = ['is_active', 'organization']
    search_fields = ['name', 'prefix', 'organization__name']
    readonly_fields = ['prefix', 'last_used_at', 'created_at']
    actions = ['revoke_keys']

    def get_fields(self, request, obj=None):
        if obj is None:
            return ['organization', 'name', 'is_active']
        return ['organization', 'name', 'prefix', 'is_active', 'last_used_at', 'created_at']

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return []
        return ['organization'] + self.readonly_fields

    def save_model(self, request, obj, form, change):
        """
        New keys are generated here; the raw key is displayed once
        in the success message and never stored.
        """
        if change:
            super().save_model(request, obj, form, change)
            return

        raw_key = obj.assign_new_key()
        super().save_model(request, obj, form, change)

        messages.warning(
            request,
            f'API key created: {raw_key} (copy it now, it will not be shown again)'
        )

    @admin.action(description='Revoke selected API keys')
    def revoke_keys(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} API key(s) revoked.', messages.SUCCESS)
