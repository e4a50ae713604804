import glob
import os
import shutil
import subprocess
import sys

SOURCE_DIRS = ("pgrepo", "tests", "examples", "scripts")


def _pytest(*args):
    result = subprocess.run([sys.executable, "-m", "pytest", *args], check=False)
    sys.exit(result.returncode)

def run_unit_tests():
    """Run the mocked unit suite in pgrepo/tests."""
    print("Running unit tests...")
    _pytest("pgrepo/tests")

def run_integration_tests():
    """Run the live PostgreSQL suite in tests/ (uses DATABASE_URL)."""
    print("Running integration tests...")
    _pytest("tests")

def run_all_tests():
    print("Running all tests...")
    _pytest()

def build_artifacts(root="."):
    """
    Lists caches and build output under `root`: .pytest_cache, build/, *.egg-info,
    and every __pycache__ below the source directories.
    """
    found = [os.path.join(root, ".pytest_cache"), os.path.join(root, "build")]
    found.extend(glob.glob(os.path.join(root, "*.egg-info")))
    for source in SOURCE_DIRS:
        for current, dirs, _ in os.walk(os.path.join(root, source)):
            if "__pycache__" in dirs:
                found.append(os.path.join(current, "__pycache__"))
    return [path for path in found if os.path.isdir(path)]

def clean_project(root="."):
    """Remove caches and build output; the virtualenv is left alone."""
    print("Cleaning up project...")
    for folder in build_artifacts(root):
        try:
            shutil.rmtree(folder)
            print(f"Removed: {folder}")
        except OSError as e:
            print(f"Failed to remove {folder}: {e}")

    print("Cleanup complete.")
