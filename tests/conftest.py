"""Shared fixtures for the insole pipeline tests."""

import os

import numpy as np
import pytest

from insolepreview.controller.contour import build_outline
from insolepreview.controller.extruder import extrude
from insolepreview.controller.pipeline import InsoleGenerator
from insolepreview.model.state import InsoleParameters


# Parameters used by the reference checks: width=1, length=2, thickness=0.4
REF_WIDTH = 1.0
REF_LENGTH = 2.0
REF_THICKNESS = 0.4


@pytest.fixture
def ref_params():
    return InsoleParameters(width=REF_WIDTH, length=REF_LENGTH, thickness=REF_THICKNESS)


@pytest.fixture
def ref_outline():
    return build_outline(REF_WIDTH, REF_LENGTH, samples_per_segment=16)


@pytest.fixture
def flat_mesh(ref_outline):
    return extrude(ref_outline, REF_THICKNESS)


@pytest.fixture
def generator():
    return InsoleGenerator(samples_per_segment=16, cache_size=4)


def find_vertex(positions, x, z, indices, tol=1e-9):
    """Index (into `positions`) of the vertex at (x, z) among `indices`, or None."""
    pts = positions[indices]
    hits = np.nonzero((np.abs(pts[:, 0] - x) < tol) & (np.abs(pts[:, 2] - z) < tol))[0]
    return int(indices[hits[0]]) if hits.size else None


@pytest.fixture
def vertex_at():
    return find_vertex


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for all widget tests, rendered offscreen."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
