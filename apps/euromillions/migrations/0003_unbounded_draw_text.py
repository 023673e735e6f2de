from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ('euromillions', '0002_default_model'),
    ]

    operations = [
        migrations.AlterField(
            model_name='draw',
            name='date',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='draw',
            name='jackpot_won',
            field=models.TextField(default='No'),
        ),
    ]
