from django.db import models


class Draw(models.Model):
    date = models.TextField()
    draw_number = models.IntegerField()
    main_numbers = models.JSONField()
    lucky_stars = models.JSONField()
    jackpot_amount = models.FloatField(default=0)
    jackpot_won = models.TextField(default='No')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'draws'
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        numbers = ' '.join(str(n) for n in self.main_numbers)
        stars = ' '.join(str(n) for n in self.lucky_stars)
        return f"#{self.draw_number} {self.date}: {numbers} * {stars}"


class Prediction(models.Model):
    PATTERN_CHOICES = [
        ('High', 'High'),
        ('Medium', 'Medium'),
        ('Low', 'Low'),
    ]

    main_numbers = models.JSONField()
    lucky_stars = models.JSONField()
    confidence_score = models.FloatField()
    model_version = models.CharField(max_length=32)
    pattern_match = models.CharField(max_length=8, choices=PATTERN_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'predictions'
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.created_at:%Y-%m-%d %H:%M} {self.main_numbers} * {self.lucky_stars} ({self.pattern_match})"


class MLModel(models.Model):
    version = models.CharField(max_length=32)
    accuracy = models.FloatField()
    training_data = models.IntegerField(default=0)
    last_trained = models.DateTimeField(auto_now_add=True)
    # Kept as a "true"/"false" string to match the exported JSON shape.
    is_active = models.CharField(max_length=5, default='true', db_index=True)

    class Meta:
        db_table = 'ml_models'
        ordering = ['-last_trained', '-id']

    def __str__(self) -> str:
        label = 'active' if self.is_active == 'true' else 'inactive'
        return f"{self.version} ({label}) accuracy={self.accuracy}"
