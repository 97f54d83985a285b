"""Management command: run the match engine for one brief on demand."""
from django.core.management.base import BaseCommand, CommandError

from apps.matching.engine import SCORER_MODES, MatchEngine
from apps.matching.exceptions import MatchingError


class Command(BaseCommand):
    help = "Score eligible designers against a brief and print the ranking."

    def add_arguments(self, parser):
        parser.add_argument("brief_id", type=str, help="Brief UUID")
        parser.add_argument(
            "--scorer",
            choices=SCORER_MODES,
            default=None,
            help="Override MATCHING_SCORER for this run",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Rank only, do not persist the best match",
        )

    def handle(self, *args, **options):
        engine = MatchEngine.from_settings(options["scorer"])
        try:
            outcome = engine.run(options["brief_id"], persist=not options["dry_run"])
        except MatchingError as exc:
            raise CommandError(f"{exc.code}: {exc}") from exc

        brief = outcome.brief
        self.stdout.write(
            f"Brief {brief.brief_id}: {brief.category} / {brief.timeline_bucket} / "
            f"{brief.budget_bucket} (scorer={engine.scorer_mode})"
        )
        if outcome.message:
            self.stdout.write(self.style.WARNING(f"{outcome.kind}: {outcome.message}"))
            return

        for i, result in enumerate(outcome.ranked, 1):
            d = result.designer
            self.stdout.write(
                f"{i:>2}. {result.score:6.2f} [{result.confidence:<6}] "
                f"{d.first_name} {d.last_initial}. ({d.pk})"
            )
            for reason in result.reasons:
                self.stdout.write(f"      - {reason}")

        if outcome.match is not None:
            state = "created" if outcome.created else "already existed"
            self.stdout.write(self.style.SUCCESS(f"\nMatch {outcome.match.pk} {state}"))
