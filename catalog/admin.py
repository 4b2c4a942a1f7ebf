from django.contrib import admin
from .models import Show, Person, Appearance


class PersonAdmin(admin.ModelAdmin):
    # Derived by derive_eligibility, never edited by hand
    readonly_fields = ("distinct_show_count", "is_eligible")
    list_display = ("name", "distinct_show_count", "is_eligible")
    list_filter = ("is_eligible",)
    search_fields = ("name",)


class AppearanceAdmin(admin.ModelAdmin):
    readonly_fields = ("kind",)
    list_display = ("show", "person", "episode_count", "guest_episode_count", "kind")
    list_filter = ("kind",)


admin.site.register(Show)
admin.site.register(Person, PersonAdmin)
admin.site.register(Appearance, AppearanceAdmin)
