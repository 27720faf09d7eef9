"""
Manual snapshot of the persisted store files.

    python -m core.backup [--backup-dir DIR] [--keep N]

Copies the configured jobs/decks files (or the SQLite file) into a new
timestamped directory and prunes older snapshots.
"""
import argparse
import datetime
import shutil
import sys
from pathlib import Path
from core.logging_manager import setup_loggers
from config.config_loader import load_backup_config

# Initialize loggers for this module
success_logger, fail_logger = setup_loggers(logger_name="backup")

BACKUP_PREFIX = "backup-"


def _new_backup_dir(backup_dir: Path) -> Path:
    stamp = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    target = backup_dir / f"{BACKUP_PREFIX}{stamp}"
    suffix = 1
    while target.exists():
        target = backup_dir / f"{BACKUP_PREFIX}{stamp}-{suffix}"
        suffix += 1
    return target


def prune_backups(backup_dir: Path, keep: int):
    """Delete all but the newest `keep` snapshots. Returns the removed paths."""
    snapshots = sorted(
        (p for p in backup_dir.glob(f"{BACKUP_PREFIX}*") if p.is_dir()),
        key=lambda p: p.name,
        reverse=True,
    )
    removed = []
    for old in snapshots[max(keep, 1):]:
        shutil.rmtree(old)
        removed.append(old)
        success_logger.info(f"Removed old backup: {old}")
    return removed


def backup_data(sources=None, backup_dir=None, keep=None):
    """
    Copy the store files into backup_dir/backup-<UTC timestamp>/.

    Returns the snapshot directory, or None if no file could be copied.
    """
    config = load_backup_config()
    sources = [Path(s) for s in (sources if sources is not None else config["sources"])]
    backup_dir = Path(backup_dir if backup_dir is not None else config["backup_dir"])
    keep = keep if keep is not None else config["keep"]

    existing = [s for s in sources if s.exists()]
    missing = [s for s in sources if not s.exists()]
    for s in missing:
        fail_logger.warning(f"Skipping missing store file: {s}")

    if not existing:
        fail_logger.error("Backup failed: no store files to copy")
        return None

    target = _new_backup_dir(backup_dir)
    try:
        target.mkdir(parents=True)
        for source in existing:
            shutil.copy2(source, target / source.name)
    except OSError as e:
        fail_logger.error(f"Backup failed: {e}")
        shutil.rmtree(target, ignore_errors=True)
        return None

    success_logger.info(f"Backup created: {target} | Files: {[s.name for s in existing]}")

    try:
        prune_backups(backup_dir, keep)
    except OSError as e:
        fail_logger.error(f"Pruning old backups failed: {e}")

    return target


def main(argv=None):
    parser = argparse.ArgumentParser(description="Snapshot the job/deck store files.")
    parser.add_argument("--backup-dir", type=str, default=None, help="Where snapshots are written")
    parser.add_argument("--keep", type=int, default=None, help="Number of snapshots to retain")
    args = parser.parse_args(argv)

    print("Creating manual backup...")
    backup_path = backup_data(backup_dir=args.backup_dir, keep=args.keep)

    if backup_path:
        print(f"Backup created: {backup_path}")
        return 0

    print("Backup failed, see logs for details", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
