from __future__ import annotations
import argparse, datetime, logging, random
from mbti_core.config import load_config
from mbti_core.content import ContentCorrelator
from mbti_core.engine import AssessmentEngine
from mbti_core.errors import DataUnavailable, NoEligibleQuestions
from mbti_core.question_bank import default_repository
from mbti_core.storage import FileContentRepository, FileProfileStore
from mbti_core.types import LIKERT_LABELS, LIKERT_VALUES
def ask(prompt: str) -> int:
    print(prompt)
    for v in sorted(LIKERT_VALUES, reverse=True): print(f"  [{v:+d}] {LIKERT_LABELS[v]}")
    while True:
        raw = input("Your choice (-2..2): ").strip()
        try:
            v = int(raw)
        except ValueError:
            v = None
        if v in LIKERT_VALUES: return v
        print("Enter a number between -2 and 2.")
def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Personality assessment in the terminal")
    ap.add_argument("--dob", required=True, help="date of birth, YYYY-MM-DD")
    ap.add_argument("--user", default=None, help="profile id to save the result against")
    ap.add_argument("--seed", type=int, default=None)
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    cfg = load_config()
    rng = random.Random(args.seed) if args.seed is not None else None
    engine = AssessmentEngine(
        default_repository(),
        results=FileProfileStore() if args.user else None,
        content=ContentCorrelator(FileContentRepository()),
        cfg=cfg, rng=rng,
    )
    try:
        session = engine.start(args.user, datetime.date.fromisoformat(args.dob))
    except (DataUnavailable, NoEligibleQuestions) as e:
        print(f"Cannot start assessment: {e}")
        return 1

    print(f"Personality Assessment: {len(session.questions)} questions (age {session.age})")
    for i, q in enumerate(session.questions, 1):
        session.record(q.id, ask(f"\n{i}. {q.question}"))

    out = engine.submit(session)
    print(f"\nYour type: {out.code}  ({out.full_form})")
    print("Tally:", " ".join(f"{k}={v}" for k, v in out.tally.items()))
    if out.content:
        d = out.content.description
        for title, body in (("About You", d.info), ("Your Strengths", d.strengths),
                            ("Growth Areas", d.challenges), ("Future Pathways", d.future_pathways)):
            if body: print(f"\n{title}\n  {body}")
        if d.mini_scenario: print(f'\nPersonal Scenario\n  "{d.mini_scenario}"')
        for v in out.content.videos: print(f"  video: {v.title} {v.url}")
        for b in out.content.books: print(f"  book:  {b.title} {b.url}")
    for w in out.warnings: print(f"[warning] {w}")
    return 0
if __name__ == "__main__": raise SystemExit(main())
