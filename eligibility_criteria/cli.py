# ==============================================
# CLI - Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Inspect and edit the eligibility criteria of benefit plans kept in
#   the plans file (see persistence/plan_file_store.py).
#
# COMMANDS:
# ---------
# 1. Show criteria (all statuses, or the status of one tab):
#    python -m eligibility_criteria.cli show PLAN_ID
#    python -m eligibility_criteria.cli show PLAN_ID --tab benefitPlanActiveTab
#
# 2. Add / remove / clear criteria for a tab:
#    python -m eligibility_criteria.cli add PLAN_ID --tab benefitPlanActiveTab "age__gt__int=18"
#    python -m eligibility_criteria.cli remove PLAN_ID --tab benefitPlanActiveTab 0
#    python -m eligibility_criteria.cli clear PLAN_ID --tab benefitPlanActiveTab
#
# 3. Migrate every plan still using the legacy list shape:
#    python -m eligibility_criteria.cli migrate --dry-run
#
# 4. List configured statuses:
#    python -m eligibility_criteria.cli statuses
#
# 5. Decoded criteria as JSON, or the fields a tab can filter on:
#    python -m eligibility_criteria.cli show PLAN_ID --json
#    python -m eligibility_criteria.cli filters PLAN_ID --tab benefitPlanActiveTab
#
# Exit code is 1 when a CriteriaStoreError is raised.
#
# ==============================================

import argparse
import json
import sys
from typing import List, Optional

from eligibility_criteria.config import get_config
from eligibility_criteria.criteria.criterion_codec import CriterionCodec
from eligibility_criteria.errors import CriteriaStoreError
from eligibility_criteria.filters.metadata_client import FilterMetadataClient
from eligibility_criteria.logging_config import configure_logging
from eligibility_criteria.persistence.plan_file_store import PlanFileStore
from eligibility_criteria.session import EligibilityCriteriaSession
from eligibility_criteria.storage.criteria_store import CriteriaStore
from eligibility_criteria.storage.extension_document import parse_extension, serialize_document
from eligibility_criteria.storage.schema_migrator import LegacySchemaMigrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eligibility-criteria",
        description="Inspect and edit benefit plan eligibility criteria"
    )
    parser.add_argument("--plans-file", help="Plans JSON file (default: PLANS_FILE or data/benefit_plans.json)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Show criteria of a plan")
    show.add_argument("plan_id")
    show.add_argument("--tab", help="Only the status of this tab")
    show.add_argument("--json", action="store_true", help="Print decoded criteria as JSON")

    add = subparsers.add_parser("add", help="Append a criterion")
    add.add_argument("plan_id")
    add.add_argument("--tab", required=True)
    add.add_argument("criterion", help="field__comparator__type=value")

    remove = subparsers.add_parser("remove", help="Remove the criterion at a position")
    remove.add_argument("plan_id")
    remove.add_argument("--tab", required=True)
    remove.add_argument("index", type=int)

    clear = subparsers.add_parser("clear", help="Clear all criteria of a tab")
    clear.add_argument("plan_id")
    clear.add_argument("--tab", required=True)

    migrate = subparsers.add_parser("migrate", help="Migrate legacy criteria of every plan")
    migrate.add_argument("--dry-run", action="store_true")

    filters = subparsers.add_parser("filters", help="List the fields a tab can filter on")
    filters.add_argument("plan_id")
    filters.add_argument("--tab", required=True)

    subparsers.add_parser("statuses", help="List beneficiary statuses")
    return parser


def _show(store: PlanFileStore, plan_id: str, tab: Optional[str], as_json: bool = False) -> None:
    config = get_config()
    plan = store.get(plan_id)
    if tab:
        session = EligibilityCriteriaSession(plan, tab, config=config)
        if not session.visible:
            print(f"Tab '{tab}' has no beneficiary status")
            return
        buckets = {session.status: session.filters}
    else:
        buckets = CriteriaStore(config.status.default_status).criteria_by_status(plan)

    if as_json:
        codec = CriterionCodec()
        decoded = {
            status: [c.to_dict() for c in codec.decode_all([c.raw for c in bucket])]
            for status, bucket in buckets.items()
        }
        print(json.dumps(decoded, indent=2, ensure_ascii=False))
        return

    if not buckets:
        print(f"Plan {plan_id} has no eligibility criteria")
        return
    for status, bucket in buckets.items():
        print(f"{status}:")
        for position, criterion in enumerate(bucket):
            print(f"  [{position}] {criterion.raw}")


def _edit(store: PlanFileStore, args: argparse.Namespace) -> None:
    plan = store.get(args.plan_id)
    session = EligibilityCriteriaSession(plan, args.tab, config=get_config(), on_entity_changed=store.put)

    if args.command == "add":
        criterion = CriterionCodec().decode(args.criterion)
        session.add_filter(criterion)
    elif args.command == "remove":
        session.remove_filter(args.index)
    else:
        session.clear_filters()

    if session.plan is plan:
        print("✓ No change")
    else:
        print(f"✓ Saved {len(session.filters)} criteria for {session.status}")


def _filters(store: PlanFileStore, plan_id: str, tab: str) -> None:
    config = get_config()
    session = EligibilityCriteriaSession(store.get(plan_id), tab, config=config)
    if not session.visible:
        print(f"Tab '{tab}' has no beneficiary status")
        return

    client = FilterMetadataClient.from_config(config.filter_service)
    for descriptor in client.fetch(session.custom_filter_params()):
        print(f"{descriptor.get('type')}:")
        for possible in descriptor.get("possibleFilters") or []:
            print(f"  {possible.get('field')} [{possible.get('filter')}] ({possible.get('type')})")


def _migrate(store: PlanFileStore, dry_run: bool) -> None:
    migrator = LegacySchemaMigrator(get_config().status.default_status)
    updated = []
    for plan in store.all().values():
        result = migrator.migrate_document(parse_extension(plan.extension))
        if result.migrated:
            print(f"⟳ {plan.id}: {result.shape.value} -> {result.statuses}")
            updated.append(plan.with_extension(serialize_document(result.document)))

    if updated and not dry_run:
        store.put_all(updated)
    suffix = " (dry run)" if dry_run else ""
    print(f"✓ Migrated {len(updated)} plans{suffix}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
        configure_logging(config.log_level)
        store = PlanFileStore(args.plans_file or config.plans_file)

        if args.command == "show":
            _show(store, args.plan_id, args.tab, args.json)
        elif args.command in ("add", "remove", "clear"):
            _edit(store, args)
        elif args.command == "filters":
            _filters(store, args.plan_id, args.tab)
        elif args.command == "migrate":
            _migrate(store, args.dry_run)
        elif args.command == "statuses":
            for status in config.status.statuses:
                marker = " (default)" if status == config.status.default_status else ""
                print(f"{status}{marker}")
    except CriteriaStoreError as e:
        print(f"✗ {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
