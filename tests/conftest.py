"""Pytest configuration: add the lab source directory and the repo root to sys.path."""

import sys
import os

root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
lab_dir = os.path.join(root_dir, "matrix-lab")
sys.path.insert(0, lab_dir)
sys.path.insert(0, root_dir)
