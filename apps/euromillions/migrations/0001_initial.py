from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Draw',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.CharField(db_index=True, max_length=32)),
                ('draw_number', models.IntegerField()),
                ('main_numbers', models.JSONField()),
                ('lucky_stars', models.JSONField()),
                ('jackpot_amount', models.FloatField(default=0)),
                ('jackpot_won', models.CharField(default='No', max_length=8)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'draws',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Prediction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('main_numbers', models.JSONField()),
                ('lucky_stars', models.JSONField()),
                ('confidence_score', models.FloatField()),
                ('model_version', models.CharField(max_length=32)),
                ('pattern_match', models.CharField(choices=[('High', 'High'), ('Medium', 'Medium'), ('Low', 'Low')], max_length=8)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'db_table': 'predictions',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='MLModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('version', models.CharField(max_length=32)),
                ('accuracy', models.FloatField()),
                ('training_data', models.IntegerField(default=0)),
                ('last_trained', models.DateTimeField(auto_now_add=True)),
                ('is_active', models.CharField(db_index=True, default='true', max_length=5)),
            ],
            options={
                'db_table': 'ml_models',
                'ordering': ['-last_trained', '-id'],
            },
        ),
    ]
