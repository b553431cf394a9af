"""Configuration validation and loading"""

import math

import pytest

from confetti.core.config import BlastDirectionality, ConfettiConfig


def test_defaults_are_valid():
    config = ConfettiConfig()
    assert config.emission_frequency == 0.02
    assert config.number_of_particles == 10
    assert config.blast_direction == pytest.approx(math.pi)
    assert config.blast_directionality is BlastDirectionality.DIRECTIONAL
    assert config.colors is None


def test_boundary_values_are_valid():
    ConfettiConfig(
        emission_frequency=1.0,
        number_of_particles=1,
        min_blast_force=0.001,
        max_blast_force=0.001,
        minimum_size=(1, 1),
        maximum_size=(1, 1),
        particle_drag=1.0,
        gravity=1.0,
    )
    ConfettiConfig(emission_frequency=0.0, particle_drag=0.0, gravity=0.0)


@pytest.mark.parametrize("overrides", [
    {'min_blast_force': 0},
    {'max_blast_force': 0},
    {'min_blast_force': -1},
    {'min_blast_force': 10, 'max_blast_force': 5},
    {'emission_frequency': -0.1},
    {'emission_frequency': 1.5},
    {'emission_frequency': float('nan')},
    {'number_of_particles': 0},
    {'number_of_particles': 2.5},
    {'number_of_particles': True},
    {'minimum_size': (0, 10)},
    {'maximum_size': (30, -1)},
    {'minimum_size': (40, 10), 'maximum_size': (30, 15)},
    {'minimum_size': (20, 20), 'maximum_size': (30, 15)},
    {'minimum_size': (20,)},
    {'particle_drag': 1.01},
    {'particle_drag': -0.5},
    {'gravity': -0.1},
    {'gravity': 2},
    {'blast_direction': None},
    {'blast_direction': math.inf},
    {'max_blast_force': math.inf},
    {'min_blast_force': math.inf, 'max_blast_force': math.inf},
    {'maximum_size': (30.0, math.inf)},
    {'minimum_size': (-math.inf, 10.0)},
    {'blast_directionality': 'sideways'},
    {'colors': ['not-a-color']},
])
def test_invalid_values_raise(overrides):
    with pytest.raises(ValueError):
        ConfettiConfig(**overrides)


def test_loose_input_is_normalized():
    config = ConfettiConfig(
        blast_directionality='EXPLOSIVE',
        colors=['#FF0000', [0, 255, 0]],
        minimum_size=[4, 2],
        maximum_size=[8, 4],
    )
    assert config.blast_directionality is BlastDirectionality.EXPLOSIVE
    assert config.colors == ((255, 0, 0), (0, 255, 0))
    assert config.minimum_size == (4.0, 2.0)
    assert config.maximum_size == (8.0, 4.0)


def test_config_is_immutable():
    config = ConfettiConfig()
    with pytest.raises(AttributeError):
        config.gravity = 0.5


def test_dict_round_trip():
    config = ConfettiConfig(colors=[(1, 2, 3)], blast_directionality='explosive', seed=3)
    data = config.to_dict()
    assert data['colors'] == ['#010203']
    assert data['blast_directionality'] == 'explosive'
    assert ConfettiConfig.from_dict(data) == config


def test_from_dict_ignores_unknown_keys():
    config = ConfettiConfig.from_dict({'gravity': 0.7, 'description': 'ignored', 'tags': ['x']})
    assert config.gravity == 0.7


def test_from_yaml(tmp_path):
    path = tmp_path / 'burst.yaml'
    path.write_text(
        "emission_frequency: 0.5\n"
        "number_of_particles: 12\n"
        "blast_directionality: explosive\n"
        "colors: ['#FFD700', [255, 255, 255]]\n"
        "minimum_size: [5, 5]\n"
        "maximum_size: [10, 6]\n"
    )
    config = ConfettiConfig.from_yaml(path)
    assert config.emission_frequency == 0.5
    assert config.number_of_particles == 12
    assert config.blast_directionality is BlastDirectionality.EXPLOSIVE
    assert config.colors == ((255, 215, 0), (255, 255, 255))
    assert config.maximum_size == (10.0, 6.0)


def test_from_yaml_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfettiConfig.from_yaml(tmp_path / 'missing.yaml')

    path = tmp_path / 'list.yaml'
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        ConfettiConfig.from_yaml(path)

    path = tmp_path / 'bad.yaml'
    path.write_text("gravity: 3\n")
    with pytest.raises(ValueError):
        ConfettiConfig.from_yaml(path)
