from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Route",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("route_id", models.CharField(max_length=255, unique=True)),
                ("route_short_name", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("route_long_name", models.CharField(blank=True, default="", max_length=255)),
                ("route_type", models.PositiveSmallIntegerField(default=3)),
            ],
        ),
        migrations.CreateModel(
            name="Stop",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("stop_id", models.CharField(max_length=255, unique=True)),
                ("stop_code", models.CharField(blank=True, default="", max_length=255)),
                ("stop_name", models.CharField(db_index=True, max_length=255)),
                ("stop_desc", models.TextField(blank=True, default="")),
                ("stop_lat", models.FloatField()),
                ("stop_lon", models.FloatField()),
                (
                    "authority",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        default="",
                        help_text="Region or transport authority the stop belongs to",
                        max_length=255,
                    ),
                ),
            ],
            options={
                "ordering": ["stop_name"],
            },
        ),
        migrations.CreateModel(
            name="StopTime",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("trip_id", models.CharField(db_index=True, max_length=255)),
                ("stop_id", models.CharField(db_index=True, max_length=255)),
                ("stop_sequence", models.PositiveIntegerField()),
                ("arrival_time", models.CharField(blank=True, default="", max_length=8)),
                ("departure_time", models.CharField(blank=True, default="", max_length=8)),
            ],
            options={
                "ordering": ["trip_id", "stop_sequence"],
            },
        ),
        migrations.CreateModel(
            name="Trip",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("trip_id", models.CharField(max_length=255, unique=True)),
                ("route_id", models.CharField(db_index=True, max_length=255)),
                ("service_id", models.CharField(blank=True, default="", max_length=255)),
                (
                    "trip_headsign",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Destination shown on the vehicle; blank when the feed has none",
                        max_length=255,
                    ),
                ),
                ("direction_id", models.PositiveSmallIntegerField(blank=True, null=True)),
            ],
        ),
        migrations.AddConstraint(
            model_name="stoptime",
            constraint=models.UniqueConstraint(fields=("trip_id", "stop_sequence"), name="unique_trip_stop_sequence"),
        ),
    ]
