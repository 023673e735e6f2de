from django.contrib import admin, messages

from .models import Draw, MLModel, Prediction
from .services.storage import recomputed_accuracy


@admin.register(Draw)
class DrawAdmin(admin.ModelAdmin):
    list_display = ('date', 'draw_number', 'main_numbers', 'lucky_stars', 'jackpot_amount', 'jackpot_won', 'created_at')
    list_filter = ('jackpot_won',)
    search_fields = ('date', 'draw_number')


@admin.register(Prediction)
class PredictionAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'main_numbers', 'lucky_stars', 'confidence_score', 'pattern_match', 'model_version')
    list_filter = ('pattern_match', 'model_version')


@admin.register(MLModel)
class MLModelAdmin(admin.ModelAdmin):
    list_display = ('version', 'accuracy', 'training_data', 'last_trained', 'is_active')
    list_filter = ('is_active',)
    actions = ['recompute_accuracy']

    def recompute_accuracy(self, request, queryset):
        total = Draw.objects.count()
        updated = queryset.update(training_data=total, accuracy=recomputed_accuracy(total))
        messages.add_message(
            request,
            messages.INFO,
            f"Recomputed accuracy for {updated} model(s) from {total} draws.",
        )

    recompute_accuracy.short_description = 'Recompute accuracy from stored draws'
