from django.contrib import admin
from .models import DailyPuzzle, DailyCell


class DailyCellInline(admin.TabularInline):
    model = DailyCell
    extra = 0
    readonly_fields = ("row_idx", "col_idx", "answer_count")


class DailyPuzzleAdmin(admin.ModelAdmin):
    readonly_fields = ("seed", "created_at")
    list_display = ("date", "seed", "created_at")
    inlines = [DailyCellInline]


admin.site.register(DailyPuzzle, DailyPuzzleAdmin)
