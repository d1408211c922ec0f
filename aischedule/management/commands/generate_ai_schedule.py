import json

from django.core.management.base import BaseCommand, CommandError

from aischedule.contracts import ScheduleRequirement
from aischedule.exceptions import EntityNotFound, InvalidRequirementsError
from aischedule.models import User
from aischedule.services import AiScheduleService, ScheduleDataEncoder


class Command(BaseCommand):
    help = "Generate a draft schedule with the genetic algorithm from a JSON list of schedule requirements"

    def add_arguments(self, parser):
        parser.add_argument(
            'requirements_file',
            help="JSON file with a list of {date, shifts: [{shift_id, roles: [{role_id, quantity}]}]}"
        )
        parser.add_argument(
            '--receiver',
            required=True,
            help="Employee id of the user who receives the result notification"
        )
        parser.add_argument(
            '--max-generations',
            type=int,
            default=None,
            help="Override AI_SCHEDULE['MAX_GENERATIONS']"
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help="Seed for the random source (default: random)"
        )
        parser.add_argument(
            '--no-future-check',
            action='store_true',
            help="Accept requirement dates that are not in the future"
        )

    def handle(self, *args, **options):
        try:
            with open(options['requirements_file'], 'r') as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise CommandError(f"Cannot read requirements: {e}")

        try:
            receiver = User.objects.get(employee_id=options['receiver'], is_active=True)
        except User.DoesNotExist:
            raise CommandError(f"Active user with employee id {options['receiver']} not found")

        overrides = {}
        if options['max_generations'] is not None:
            overrides['max_generations'] = options['max_generations']
        seed = options['seed']

        service = AiScheduleService(
            encoder=ScheduleDataEncoder(validate_future_dates=not options['no_future_check']),
            algorithm_factory=lambda user: AiScheduleService.default_algorithm(user, seed=seed, **overrides),
        )

        try:
            requirements = [ScheduleRequirement.from_dict(item) for item in raw]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise CommandError(f"Invalid requirements: {e}")

        self.stdout.write(f"Generating schedule for {len(requirements)} days...")
        try:
            response = service.generate_schedule(requirements, receiver)
        except (InvalidRequirementsError, EntityNotFound) as e:
            raise CommandError(f"Invalid requirements: {e}")

        if response.success:
            count = len(service.last_generated_shift_ids or [])
            self.stdout.write(self.style.SUCCESS(f"{response.message} ({count} shifts)"))
        else:
            self.stdout.write(self.style.ERROR(response.message))
