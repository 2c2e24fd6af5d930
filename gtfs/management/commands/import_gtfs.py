"""
Django management command to load a GTFS feed from an unzipped directory
"""

import csv
import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from gtfs.models import Route, Stop, StopTime, Trip

logger = logging.getLogger(__name__)

FEED_FILES = ["stops.txt", "routes.txt", "trips.txt", "stop_times.txt"]


def read_rows(path):
    # utf-8-sig strips the BOM some publishers prepend
    with open(path, newline="", encoding="utf-8-sig") as f:
        for row in csv.DictReader(f):
            yield {key.strip(): (value or "").strip() for key, value in row.items() if key}


def optional_int(value):
    return int(value) if value not in (None, "") else None


def normalize_gtfs_time(value):
    """Zero-pad the hour of H:MM:SS so stored times sort as text."""
    hours, sep, rest = value.partition(":")
    if sep and hours.isdecimal() and len(hours) == 1:
        return f"0{hours}:{rest}"
    return value


class Command(BaseCommand):
    help = 'Import stops, routes, trips and stop times from an unzipped GTFS directory'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            type=str,
            help='Directory containing stops.txt, routes.txt, trips.txt and stop_times.txt'
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing schedule data before importing'
        )
        parser.add_argument(
            '--authority',
            type=str,
            default='',
            help='Region assigned to stops when stops.txt has no authority column'
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=5000,
            help='Rows per bulk insert (default: 5000)'
        )

    def handle(self, *args, **options):
        feed_dir = Path(options['path'])
        batch_size = options['batch_size']
        if batch_size < 1:
            raise CommandError('--batch-size must be positive')

        missing = [name for name in FEED_FILES if not (feed_dir / name).is_file()]
        if missing:
            raise CommandError(f'Missing GTFS files in {feed_dir}: {", ".join(missing)}')

        with transaction.atomic():
            if options['clear']:
                for model in (StopTime, Trip, Route, Stop):
                    deleted = model.objects.all().delete()[0]
                    self.stdout.write(f'Deleted {deleted} {model.__name__} rows')

            counts = {
                'stops': self.load(Stop, self.stops(feed_dir / 'stops.txt', options['authority']), batch_size),
                'routes': self.load(Route, self.routes(feed_dir / 'routes.txt'), batch_size),
                'trips': self.load(Trip, self.trips(feed_dir / 'trips.txt'), batch_size),
                'stop times': self.load(StopTime, self.stop_times(feed_dir / 'stop_times.txt'), batch_size),
            }

        summary = ', '.join(f'{count} {name}' for name, count in counts.items())
        self.stdout.write(self.style.SUCCESS(f'Imported {summary}'))

    def load(self, model, objects, batch_size):
        total = 0
        batch = []
        for obj in objects:
            batch.append(obj)
            if len(batch) >= batch_size:
                model.objects.bulk_create(batch)
                total += len(batch)
                batch = []
        if batch:
            model.objects.bulk_create(batch)
            total += len(batch)
        logger.info('Loaded %d %s rows', total, model.__name__)
        return total

    def stops(self, path, default_authority):
        for row in read_rows(path):
            try:
                lat, lon = float(row['stop_lat']), float(row['stop_lon'])
            except (KeyError, ValueError):
                # Stations without coordinates cannot be placed on the map
                logger.warning('Skipping stop %s without valid coordinates', row.get('stop_id'))
                continue
            yield Stop(
                stop_id=row['stop_id'],
                stop_code=row.get('stop_code', ''),
                stop_name=row.get('stop_name', ''),
                stop_desc=row.get('stop_desc', ''),
                stop_lat=lat,
                stop_lon=lon,
                authority=row.get('authority') or default_authority,
            )

    def routes(self, path):
        for row in read_rows(path):
            yield Route(
                route_id=row['route_id'],
                route_short_name=row.get('route_short_name', ''),
                route_long_name=row.get('route_long_name', ''),
                route_type=int(row['route_type']) if row.get('route_type') else 3,
            )

    def trips(self, path):
        for row in read_rows(path):
            yield Trip(
                trip_id=row['trip_id'],
                route_id=row['route_id'],
                service_id=row.get('service_id', ''),
                trip_headsign=row.get('trip_headsign', ''),
                direction_id=optional_int(row.get('direction_id')),
            )

    def stop_times(self, path):
        for row in read_rows(path):
            yield StopTime(
                trip_id=row['trip_id'],
                stop_id=row['stop_id'],
                stop_sequence=int(row['stop_sequence']),
                arrival_time=normalize_gtfs_time(row.get('arrival_time', '')),
                departure_time=normalize_gtfs_time(row.get('departure_time', '')),
            )
