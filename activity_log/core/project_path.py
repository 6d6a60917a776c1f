from pathlib import Path

# This will give the absolute path to the project root, assuming this file is in activity_log/core/
PROJECT_PATH = Path(__file__).resolve().parent.parent.parent

DATA_VOLUME = PROJECT_PATH / "datavolume"
