from django.contrib import admin

from .models import ApiKey, PartModel


@admin.register(PartModel)
class PartAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'number', 'parent', 'updated_at']
    search_fields = ['name', 'number']
    raw_id_fields = ['parent']


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'is_active', 'created_at']
    list_filter = ['is_active']
    readonly_fields = ['key_hash']
