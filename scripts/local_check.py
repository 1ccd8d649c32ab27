# scripts/local_check.py
import subprocess
import sys
import tomllib

STEPS = [
    ("python -m black .", "Black formatting", True),
    ("ruff check src scripts tests", "Ruff lint", False),
    ("mypy src/rostercheck", "Mypy type check", False),
    ("python -m pytest -q", "Test suite", False),
]


def run(cmd: str, desc: str, fix: bool = False) -> bool:
    print(f"\n{'🔧' if fix else '🧪'} {desc} ...")
    try:
        subprocess.run(cmd, check=True, shell=True)
    except subprocess.CalledProcessError as e:
        print(f"⚠️  {desc} failed ({e.returncode})")
        return False
    return True


def check_pyproject() -> None:
    try:
        with open("pyproject.toml", "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"❌ pyproject.toml error: {e}")
        sys.exit(1)
    name = data.get("project", {}).get("name")
    print(f"✅ pyproject.toml OK (project: {name})")


def main() -> int:
    check_pyproject()
    failed = [desc for cmd, desc, fix in STEPS if not run(cmd, desc, fix)]
    if failed:
        print(f"\n❌ Failed: {', '.join(failed)}")
        return 1
    print("\n🏁 Local check completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
