"""
Ring Track Problem Implementation

This module implements a small driving task as a trial: a car must drive
around a ring-shaped track, the road lying between two concentric circles.
It is a minimal stand-in for a full driving simulation, exercising the whole
evaluation loop of the genetic algorithm.

The Car:
    The car moves in the plane with a position, a heading and a speed. Every
    step it reads five distance sensors, pointing at -60, -30, 0, 30 and 60
    degrees from its heading, which measure the distance to the nearest wall
    (capped at 'SENSOR_RANGE' and normalized to [0, 1]).

    The network receives the five sensor readings and produces two outputs
    in (-1, 1) (soft sign activation):
        - output 0: acceleration
        - output 1: steering

    The car crashes when it leaves the road, and is stopped when it makes no
    progress for 'PROGRESS_TIMEOUT' steps or completes the lap.

Evaluation:
    The fraction of the lap completed, in [0, 1]. An evaluation of 1 means the
    car finished the course; the first such genotypes can be saved to file
    (see 'save_first_n_genotypes' in the configuration).

Classes:
    Trial_Track: Trial evolving cars that drive around a ring track

Usage:
    config = Config("examples/configs/config_track.ini")
    trial  = Trial_Track(config)
    trial.run(num_jobs=1)
"""

import math
import numpy as np
from pathlib import Path

from evodrive.activations import activations
from evodrive.genotype    import Genotype
from evodrive.phenotype   import Agent
from evodrive.run         import Config, Trial

INNER_RADIUS     = 8.0
OUTER_RADIUS     = 12.0
SENSOR_ANGLES    = np.radians([-60.0, -30.0, 0.0, 30.0, 60.0])
SENSOR_RANGE     = 10.0
MAX_SPEED        = 0.4
ACCELERATION     = 0.05
TURN_SPEED       = 0.15
MAX_STEPS        = 2000
PROGRESS_TIMEOUT = 100

def ray_distance(position: np.ndarray, direction: np.ndarray) -> float:
    """
    Distance from 'position' (on the road) along 'direction' (unit vector) to
    the nearest wall of the ring, capped at SENSOR_RANGE.
    """
    b = float(position @ direction)
    p2 = float(position @ position)

    # The outer wall is always hit, since the car is inside the outer circle
    distance = -b + math.sqrt(max(b * b - (p2 - OUTER_RADIUS ** 2), 0.0))

    # The inner wall is hit only if the ray points towards it
    disc = b * b - (p2 - INNER_RADIUS ** 2)
    if disc >= 0:
        t = -b - math.sqrt(disc)
        if t > 0:
            distance = min(distance, t)

    return min(distance, SENSOR_RANGE)

def drive(agent: Agent) -> float:
    """
    Drive the car controlled by the agent, and return the fraction of the lap completed.
    """
    radius   = (INNER_RADIUS + OUTER_RADIUS) / 2
    position = np.array([radius, 0.0])
    heading  = math.pi / 2  # tangent to the track, counter-clockwise
    speed    = 0.0

    progress      = 0.0
    best_progress = 0.0
    last_improved = 0
    angle         = 0.0

    for step in range(MAX_STEPS):
        sensors = [ray_distance(position, np.array([math.cos(heading + a), math.sin(heading + a)])) / SENSOR_RANGE
                   for a in SENSOR_ANGLES]
        acceleration, steering = agent.process_inputs(sensors)

        speed    = min(max(speed + acceleration * ACCELERATION, 0.0), MAX_SPEED)
        heading += steering * TURN_SPEED
        position = position + speed * np.array([math.cos(heading), math.sin(heading)])

        # Crashed into a wall?
        distance_to_center = math.hypot(*position)
        if not INNER_RADIUS < distance_to_center < OUTER_RADIUS:
            break

        # Angular progress around the ring (counter-clockwise)
        new_angle = math.atan2(position[1], position[0])
        delta     = (new_angle - angle + math.pi) % (2 * math.pi) - math.pi
        angle     = new_angle
        progress += delta / (2 * math.pi)

        if progress > best_progress:
            best_progress = progress
            last_improved = step
        elif step - last_improved > PROGRESS_TIMEOUT:
            break

        if progress >= 1.0:
            return 1.0

    return max(best_progress, 0.0)

class Trial_Track(Trial):
    """
    Trial evolving cars that drive around a ring track.

    Implemented Methods:
        _evaluate_fitness(agent): Drive the car, return the fraction of the lap completed
        _generation_report():     Display generation statistics
        _final_report():          Save the best genotype and visualize its network
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Parameters:
            config:          Configuration parameters; the topology must have 5 inputs and 2 outputs
            suppress_output: If True, suppress progress and final reports
        """
        if config.topology[0] != len(SENSOR_ANGLES) or config.topology[-1] != 2:
            raise ValueError(f"The track needs a topology with {len(SENSOR_ANGLES)} inputs and 2 outputs, "
                             f"got {list(config.topology)}")
        super().__init__(config, suppress_output)

    def _evaluate_fitness(self, agent: Agent) -> float:
        return drive(agent)

    def _generation_report(self, sorted_population: list[Genotype]):
        """
        Print a report describing the current generation.
        """
        evaluations = [genotype.evaluation for genotype in sorted_population]
        finished    = sum(1 for e in evaluations if e >= 1.0)

        s  = f"===============\n"
        s += f"RUN {self.restart_counter} GENERATION {self.engine.generation_count:04d}\n"
        s += f"population size  = {len(sorted_population)}\n"
        s += f"best evaluation  = {evaluations[0]:.4f}\n"
        s += f"mean evaluation  = {np.mean(evaluations):.4f}\n"
        s += f"finished the lap = {finished}\n"
        print(s)

    def _final_report(self):
        """
        Save the best genotype found, and visualize its network.
        """
        if self.best_genotype is None:
            return

        print(f"Best evaluation: {self.best_genotype.evaluation:.4f}")

        file_path = Path(self._config.statistics_dir) / "best_genotype.txt"
        file_path.parent.mkdir(parents=True, exist_ok=True)
        self.best_genotype.save_to_file(file_path)
        print(f"Best genotype saved as '{file_path}'")

        try:
            agent = Agent(self.best_genotype, activations[self._config.activation], self._config.topology)
            agent.fnn.visualize(view=True)
            print("Network visualization saved as 'Digraph.gv.pdf'")
        except Exception as e:
            print(f"Could not visualize network: {e}")

if __name__ == '__main__':
    import logging
    logging.basicConfig(level=logging.INFO)

    config = Config(str(Path(__file__).parent / "configs" / "config_track.ini"))
    trial  = Trial_Track(config)
    trial.run(num_jobs=1)
