from credit_engine.db.database import SessionLocal, init_db
from credit_engine.errors import CreditEngineError
from credit_engine.scorecard.calculators import calc_cc_from_activity
from credit_engine.services.access_service import AccessService
from credit_engine.services.aggregation_service import aggregate, wcs_streak
from credit_engine.services.score_record_service import ScoreRecordService
from credit_engine.services.weekly_scoring_service import WeeklyScoringService
from credit_engine.utils.week import current_week_id


def _read_float(label, default=None):
    raw = input(label).strip()
    if not raw and default is not None:
        return default
    try:
        return float(raw)
    except ValueError:
        print("Invalid number")
        return None


def _read_collaboration():
    raw = input("Collaboration score 0-1 (leave blank to derive from activity): ").strip()
    if raw:
        try:
            return float(raw)
        except ValueError:
            print("Invalid number")
            return None
    try:
        reviews = int(input("PR reviews this week: ") or 0)
        posts = int(input("Daily posts this week (0-5): ") or 0)
    except ValueError:
        print("Invalid count")
        return None
    retro = input("Shared a retro insight? (y/n): ").strip().lower() == 'y'
    cc = calc_cc_from_activity(reviews, posts, retro)
    print(f"Derived collaboration score: {cc}")
    return cc


def prompt_submit(db, actor):
    print("-- Submit Weekly Score --")
    user_id = input("User id: ").strip()
    week_id = input(f"Week (YYYY-Www, blank for {current_week_id()}): ").strip() or current_week_id()
    hours = _read_float("Hours worked: ")
    if hours is None:
        return

    key_results = []
    print("Key results: enter score (0, 0.4, 0.6, 0.8, 1.0) and weight; blank score to finish")
    while True:
        raw = input("  KR score: ").strip()
        if not raw:
            break
        weight = _read_float("  KR weight (blank for 1): ", default=1.0)
        try:
            key_results.append({"score": float(raw), "weight": weight})
        except ValueError:
            print("Invalid score")

    collaboration = _read_collaboration()
    if collaboration is None:
        return

    result = WeeklyScoringService(db).submit_weekly_score(
        actor, user_id, week_id, hours, key_results, collaboration
    )
    b = result.breakdown
    print(f"Saved {user_id} {week_id}: WCS={b.final_score} (base {b.base_score} x {b.multiplier})"
          f"{' [check mark]' if b.check_mark else ''} version={result.record.version}")


def prompt_list(db):
    print("-- Weekly Scores --")
    user_id = input("User id: ").strip()
    for s in ScoreRecordService(db).list_scores(user_id):
        print(s.week_id, f"EC={s.ec}", f"OC={s.oc}", f"CC={s.cc}", f"WCS={s.wcs}",
              "✓" if s.check_mark else "", f"v{s.version}")


def prompt_summary(db):
    print("-- Summary --")
    user_id = input("User id: ").strip()
    records = ScoreRecordService(db).list_scores(user_id)
    summary = aggregate(records)
    print(f"Average WCS (last {summary.weeks_counted} weeks): {summary.average_wcs:.2f}")
    print(f"Check marks: {summary.check_mark_count}")
    print(f"Current streak: {wcs_streak(records)}")


def prompt_delete(db, actor):
    print("-- Delete Weekly Score --")
    user_id = input("User id: ").strip()
    week_id = input("Week (YYYY-Www): ").strip()
    confirmed = input(f"Delete {user_id} {week_id}? Type 'yes' to confirm: ")
    if confirmed.strip().lower() != 'yes':
        print("Aborted")
        return
    ScoreRecordService(db).delete_score(user_id, week_id, actor)
    print("Deleted (audit entry written)")


def main():
    init_db()
    db = SessionLocal()
    try:
        actor_id = input("Acting as user id: ").strip()
        try:
            actor = AccessService(db).get_actor(actor_id)
        except CreditEngineError as e:
            print(e.message)
            return
        print(f"Weekly Credit CLI - {actor.user_id} ({actor.role})")
        print("Options: [s]ubmit, [l]ist, [m] summary, [d]elete, [q]uit")
        while True:
            cmd = input("Enter command: ").strip().lower()
            try:
                if cmd in ('s', 'submit'):
                    prompt_submit(db, actor)
                elif cmd in ('l', 'list'):
                    prompt_list(db)
                elif cmd in ('m', 'summary'):
                    prompt_summary(db)
                elif cmd in ('d', 'delete'):
                    prompt_delete(db, actor)
                elif cmd in ('q', 'quit'):
                    break
                else:
                    print("Unknown command - use s/l/m/d/q")
            except CreditEngineError as e:
                print(f"[{e.kind}] {e.message}")
    finally:
        db.close()


if __name__ == '__main__':
    main()
