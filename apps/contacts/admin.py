from django.contrib import admin, messages
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.html import format_html

from .models import ClientCompany, Contact


class DeletedFilter(admin.SimpleListFilter):

    title = 'deleted'
    parameter_name = 'deleted'

    def lookups(self, request, model_admin):
        return [('no', 'Live'), ('yes', 'Soft-deleted')]

    def queryset(self, request, queryset):
        if self.value() == 'no':
            return queryset.filter(deleted_at__isnull=True)
        if self.value() == 'yes':
            return queryset.filter(deleted_at__isnull=False)
        return queryset


def deleted_badge(obj):
    """Live / Deleted badge"""
    if obj.deleted_at is None:
        return format_html(
            '<span style="background-color: #28a745; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">Live</span>'
        )
    return format_html(
        '<span style="background-color: #dc3545; color: white; padding: 3px 8px; '
        'border-radius: 3px; font-size: 11px;" title="{}">Deleted</span>',
        obj.deleted_at.strftime('%Y-%m-%d %H:%M:%S')
    )


@admin.register(ClientCompany)
class ClientCompanyAdmin(admin.ModelAdmin):

    list_display = ['name', 'organization', 'contacts_count', 'state', 'created_at']
    list_filter = ['organization', DeletedFilter, 'created_at']
    search_fields = ['name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    ordering = ['-created_at']
    actions = ['soft_delete_selected']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('organization')

    def contacts_count(self, obj):
        return obj.contacts.filter(deleted_at__isnull=True).count()
    contacts_count.short_description = 'Contacts'

    def state(self, obj):
        return deleted_badge(obj)
    state.short_description = 'State'

    @admin.action(description='Soft delete selected companies')
    def soft_delete_selected(self, request, queryset):
        updated = queryset.filter(deleted_at__isnull=True).update(deleted_at=timezone.now())
        self.message_user(request, f'{updated} company(ies) soft-deleted.', messages.SUCCESS)


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'email',
        'phone',
        'organization',
        'company_display',
        'status',
        'stage',
        'state',
        'created_at',
    ]

    list_filter = [
        'organization',
        DeletedFilter,
        'status',
        'stage',
        'source',
        'created_at',
    ]

    search_fields = [
        'name',
        'phone',
        'email',
        'company_name',
        'notes',
    ]

    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['id', 'organization', 'name', 'email', 'phone']
        }),
        ('Company', {
            'fields': ['role', 'company_name', 'client_company']
        }),
        ('Classification', {
            'fields': ['status', 'stage', 'source']
        }),
        ('Dates & Value', {
            'fields': ['birth_date', 'last_interaction', 'last_purchase_date', 'total_value']
        }),
        ('Additional Info', {
            'fields': ['avatar', 'notes'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at', 'deleted_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    raw_id_fields = ['client_company']
    actions = ['soft_delete_selected', 'restore_selected']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('organization', 'client_company')

    def company_display(self, obj):
        """Linked company, falling back to the free-text name"""
        if obj.client_company:
            return obj.client_company.name
        return obj.company_name or '-'
    company_display.short_description = 'Company'

    def state(self, obj):
        return deleted_badge(obj)
    state.short_description = 'State'

    @admin.action(description='Soft delete selected contacts')
    def soft_delete_selected(self, request, queryset):
        updated = queryset.filter(deleted_at__isnull=True).update(deleted_at=timezone.now())
        self.message_user(request, f'{updated} contact(s) soft-deleted.', messages.SUCCESS)

    @admin.action(description='Restore selected contacts')
    def restore_selected(self, request, queryset):
        restored = 0
        for contact in queryset.filter(deleted_at__isnull=False):
            try:
                with transaction.atomic():
                    contact.restore()
                restored += 1
            except IntegrityError:
                # A live contact already uses this email/phone
                self.message_user(
                    request,
                    f'Cannot restore {contact}: email or phone is used by another contact.',
                    messages.ERROR
                )
        self.message_user(request, f'{restored} contact(s) restored.', messages.SUCCESS)
