from django.db import migrations


def create_default_model(apps, schema_editor):
    MLModel = apps.get_model('euromillions', 'MLModel')
    if not MLModel.objects.filter(is_active='true').exists():
        MLModel.objects.create(version='v2.4.1', accuracy=75.0, training_data=0, is_active='true')


def remove_default_model(apps, schema_editor):
    MLModel = apps.get_model('euromillions', 'MLModel')
    MLModel.objects.filter(version='v2.4.1', training_data=0).delete()


class Migration(migrations.Migration):
    dependencies = [
        ('euromillions', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_default_model, remove_default_model),
    ]
