"""
Google Business Profile Auditor - Main Entry Point
"""
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables (check multiple locations)
env_paths = [
    Path(__file__).parent / "config" / ".env",
    Path(__file__).parent / ".env",
]
for env_path in env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break
else:
    load_dotenv()  # Try default .env from environment

from gbp_audit.cli import main


if __name__ == "__main__":
    sys.exit(main())
