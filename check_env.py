#!/usr/bin/env python3
"""Helper script to check and create the .env file for the BusTrack backend."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Supabase Configuration (Required)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
BUSTRACK_SUPABASE_URL=https://your-project-id.supabase.co
BUSTRACK_SUPABASE_KEY=your-service-role-key-here

# API Configuration
BUSTRACK_API_PREFIX=/api
# BUSTRACK_FRONTEND_ALLOWED_ORIGINS - Leave commented to use defaults
# JSON array: ["http://localhost:5173","http://127.0.0.1:5173"]
# Or comma-separated: http://localhost:5173,http://127.0.0.1:5173

# Liveness and polling
BUSTRACK_ONLINE_THRESHOLD_MINUTES=5
BUSTRACK_TRACKING_POLL_SECONDS=3
BUSTRACK_FEED_AUTOSTART=false

# Exports
BUSTRACK_EXPORT_ROOT=./data/exports
"""


def _mask(line: str) -> str:
    name, _, value = line.partition("=")
    value = value.strip()
    if len(value) > 20:
        return f"{name}={value[:20]}...{value[-10:]}"
    return line


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("BusTrack Environment Variables Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        print()
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print()
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print()
    print("Current contents:")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        print(_mask(line) if line.startswith("BUSTRACK_SUPABASE_KEY=") else line)
    print("-" * 60)
    print()

    for name in ("BUSTRACK_SUPABASE_URL", "BUSTRACK_SUPABASE_KEY"):
        if os.getenv(name):
            print(f"✅ {name} set in environment")
        else:
            print(f"ℹ️  {name} not set in environment (the .env file will be used)")
    print()

    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from bustrack.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    if settings.supabase_url and settings.supabase_key:
        print("=" * 60)
        print("✅ SUCCESS: Supabase is configured!")
        print("=" * 60)
    else:
        print("=" * 60)
        print("❌ ERROR: Supabase is NOT configured")
        print("=" * 60)
        print()
        print("Troubleshooting:")
        print("1. Make sure .env file exists in project root")
        print("2. Make sure variables start with BUSTRACK_ prefix")
        print("3. Make sure there are no spaces around = sign")
        print("4. Restart backend after editing .env")


if __name__ == "__main__":
    main()
