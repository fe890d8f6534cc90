import json

import numpy as np
import pytest

from threebody.config import ConfigManager


def _write(path, document):
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_loads_bodies(tmp_path):
    path = _write(
        tmp_path / "initial.json",
        {
            "bodies": [
                {
                    "mass": 2.5,
                    "radius": 0.5,
                    "position": [1.0, 2.0, 3.0],
                    "velocity": [0.1, 0.2, 0.3],
                    "color": [1.0, 0.5, 0.25],
                },
                {
                    "mass": 4.0,
                    "radius": 3.0,
                    "position": [-1.0, 0.0, 0.0],
                    "velocity": [0.0, -1.0, 0.0],
                    "color": [0.0, 0.0, 1.0],
                },
            ]
        },
    )
    bodies = ConfigManager(path).load_initial_bodies()
    assert len(bodies) == 2
    first = bodies[0]
    assert first.mass == 2.5
    assert first.radius == 0.5
    assert np.allclose(first.position, (1.0, 2.0, 3.0))
    assert np.allclose(first.velocity, (0.1, 0.2, 0.3))
    assert first.color == (1.0, 0.5, 0.25)
    assert bodies[1].mass == 4.0
    assert np.allclose(bodies[1].initial_position, (-1.0, 0.0, 0.0))


def test_mass_and_radius_default_to_one(tmp_path):
    path = _write(
        tmp_path / "initial.json",
        {"bodies": [{"position": [0, 0, 0], "velocity": [0, 0, 0], "color": [1, 1, 1]}]},
    )
    (body,) = ConfigManager(path).load_initial_bodies()
    assert body.mass == 1.0
    assert body.radius == 1.0


def test_missing_file_gives_no_bodies(tmp_path):
    assert ConfigManager(tmp_path / "absent.json").load_initial_bodies() == []


def test_document_without_bodies(tmp_path):
    path = _write(tmp_path / "initial.json", {"other": 1})
    assert ConfigManager(path).load_initial_bodies() == []


def test_missing_position_raises(tmp_path):
    path = _write(
        tmp_path / "initial.json",
        {"bodies": [{"velocity": [0, 0, 0], "color": [1, 1, 1]}]},
    )
    with pytest.raises(ValueError, match="position"):
        ConfigManager(path).load_initial_bodies()


def test_short_vector_raises(tmp_path):
    path = _write(
        tmp_path / "initial.json",
        {"bodies": [{"position": [0, 0], "velocity": [0, 0, 0], "color": [1, 1, 1]}]},
    )
    with pytest.raises(ValueError):
        ConfigManager(path).load_initial_bodies()


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "initial.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        ConfigManager(path)