import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("booking", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Availability",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                (
                    "barber",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability",
                        to="booking.barber",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "availability",
                "ordering": ["barber_id", "date", "start_time"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("barber", "date", "start_time"),
                        name="uniq_availability_window_start",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("end_time__gt", models.F("start_time"))),
                        name="availability_end_after_start",
                    ),
                ],
            },
        ),
    ]
