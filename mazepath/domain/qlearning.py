"""Q-learning path search over the doubled-resolution maze."""

from typing import Dict, Optional, Set, Tuple

import numpy as np

from ..utils.rng import SeededRNG, make_rng
from .maze import MazeGrid, to_doubled
from .path import reconstruct_path
from .types import (
    ACTION_DELTAS, ActionInt, Coord, Episode, QLearningConfig, SearchOutcome,
    TrainingResult,
)

NUM_ACTIONS = len(ACTION_DELTAS)


def episodes_for_size(size: int) -> int:
    """
    Number of training episodes for a maze whose larger logical side is ``size``.

    The schedule jumps at 40: a 41-wide maze trains 700 episodes more than a
    40-wide one would under the middle rule.
    """
    if size <= 30:
        # size * 1.55 * 100, kept in integers
        return size * 155
    if size <= 40:
        return size * 200
    return size * 200 + 500


def next_position(state: Coord, action: ActionInt) -> Coord:
    """Doubled position one step from ``state`` in the direction of ``action``."""
    d_row, d_col = ACTION_DELTAS[action]
    return (state[0] + d_row, state[1] + d_col)


class QLearningEnvironment:
    """Maze environment with goal, wall and step rewards."""

    def __init__(self, grid: MazeGrid, start: Coord, target: Coord, config: QLearningConfig):
        self.grid = grid
        self.start = start
        self.target = target
        self.config = config
        self.current_pos = start
        self.steps_taken = 0
        self.total_reward = 0.0

    def reset(self) -> Coord:
        """Reset environment to initial state."""
        self.current_pos = self.start
        self.steps_taken = 0
        self.total_reward = 0.0
        return self.current_pos

    def step(self, action: ActionInt) -> Tuple[Coord, float, bool]:
        """
        Execute action and return (next_state, reward, done).

        Reaching the target ends the episode with the goal reward. Moving
        into a wall or off the grid ends it with the wall reward and leaves
        the agent where it was. Any other move costs the step reward.
        """
        self.steps_taken += 1
        next_pos = next_position(self.current_pos, action)

        if next_pos == self.target:
            reward = self.config.reward_goal
            done = True
        elif not self.grid.is_passable(*next_pos):
            reward = self.config.reward_wall
            next_pos = self.current_pos
            done = True
        else:
            reward = self.config.reward_step
            done = False

        self.current_pos = next_pos
        self.total_reward += reward
        return next_pos, reward, done


class QLearningAgent:
    """Tabular Q-learning agent with an epsilon-greedy policy."""

    def __init__(self, grid: MazeGrid, config: QLearningConfig, rng: SeededRNG):
        self.config = config
        self.rng = rng
        self.q_table = np.zeros((grid.rows, grid.cols, NUM_ACTIONS), dtype=np.float64)
        # The first episode is fully greedy
        self.epsilon = 0.0
        self.episodes_completed = 0

    def best_action(self, state: Coord) -> ActionInt:
        """Action with the highest value; ties go to the lowest index."""
        return int(np.argmax(self.q_table[state[0], state[1]]))

    def max_value(self, state: Coord) -> float:
        """Highest action value at ``state``."""
        return float(np.max(self.q_table[state[0], state[1]]))

    def select_action(self, state: Coord) -> ActionInt:
        """Select action using the epsilon-greedy policy."""
        if self.rng.random() < self.epsilon:
            return self.rng.randint(0, NUM_ACTIONS - 1)
        return self.best_action(state)

    def update_q_value(self, state: Coord, action: ActionInt, reward: float, next_state: Coord):
        """
        Q-learning update rule.

        Terminal transitions are not masked: the value of ``next_state``
        takes part in the target even when the episode ended there.
        """
        current_q = self.q_table[state[0], state[1], action]
        target = reward + self.config.discount_factor * self.max_value(next_state)
        self.q_table[state[0], state[1], action] = (
            current_q + self.config.learning_rate * (target - current_q)
        )

    def decay_epsilon(self, episode: int):
        """Set the exploration rate for the episode after ``episode``."""
        self.epsilon = self.config.epsilon_after(episode)

    def train_episode(self, env: QLearningEnvironment, max_steps: int) -> Episode:
        """Run one episode, truncating it after ``max_steps`` moves."""
        state = env.reset()
        epsilon_used = self.epsilon
        done = False
        truncated = False

        while not done:
            action = self.select_action(state)
            next_state, reward, done = env.step(action)
            self.update_q_value(state, action, reward, next_state)
            state = next_state

            if not done and env.steps_taken >= max_steps:
                truncated = True
                break

        episode = Episode(
            number=self.episodes_completed,
            steps=env.steps_taken,
            total_reward=env.total_reward,
            reached_goal=(state == env.target),
            epsilon_used=epsilon_used,
            truncated=truncated,
        )

        self.decay_epsilon(self.episodes_completed)
        self.episodes_completed += 1
        return episode

    def train(self, env: QLearningEnvironment, episodes: int, max_steps: int) -> TrainingResult:
        """Train the agent for the given number of episodes."""
        result = TrainingResult()

        for episode_num in range(episodes):
            episode = self.train_episode(env, max_steps)

            result.total_episodes += 1
            result.total_steps += episode.steps
            if episode.reached_goal:
                result.successful_episodes += 1
            if episode.truncated:
                result.truncated_episodes += 1

            if self.config.verbose and (episode_num + 1) % self.config.progress_interval == 0:
                print(f"Episode {episode_num + 1}/{episodes}: "
                      f"Success rate: {result.success_rate:.1%}, Epsilon: {self.epsilon:.3f}")

        result.final_epsilon = self.epsilon
        return result

    def extract_path(self, grid: MazeGrid, start: Coord, target: Coord) -> Optional[Dict[Coord, Coord]]:
        """
        Follow the greedy policy from ``start`` and record predecessor links.

        Returns None when the policy cannot reach ``target``: it walks into a
        wall, comes back to a state it already left (the greedy policy is
        deterministic, so it would loop forever), or runs past the step cap.
        """
        predecessors: Dict[Coord, Coord] = {}
        seen: Set[Coord] = {start}
        current = start
        steps = 0

        while current != target:
            if steps >= self.config.max_extraction_steps:
                return None

            next_state = next_position(current, self.best_action(current))
            if not grid.is_passable(*next_state) or next_state in seen:
                return None

            predecessors[next_state] = current
            seen.add(next_state)
            current = next_state
            steps += 1

        return predecessors


class QLearningSearch:
    """
    Path search that learns a policy before following it.

    Each call allocates a fresh Q-table and discards it afterwards. Pass a
    ``seed`` or an ``rng`` to make exploration reproducible.
    """

    def __init__(self, config: Optional[QLearningConfig] = None,
                 seed: Optional[int] = None, rng: Optional[SeededRNG] = None):
        self.config = config or QLearningConfig()
        self.config.validate()
        self.seed = seed
        self.rng = rng

    def episode_count(self, grid: MazeGrid) -> int:
        """Training episodes for ``grid``."""
        if self.config.episodes is not None:
            return self.config.episodes
        return episodes_for_size(max(grid.logical_rows, grid.logical_cols))

    def episode_step_cap(self, grid: MazeGrid) -> int:
        """Longest a single training episode may run."""
        if self.config.max_steps_per_episode is not None:
            return self.config.max_steps_per_episode
        return 4 * grid.rows * grid.cols

    def search(self, grid: MazeGrid, start: Coord, end: Coord) -> SearchOutcome:
        """Train on ``grid`` and return the greedy path between two logical points."""
        if not grid.contains_logical(start) or not grid.contains_logical(end):
            return SearchOutcome.invalid_point()

        start2 = to_doubled(start)
        goal2 = to_doubled(end)
        if start2 == goal2:
            return SearchOutcome.ok([start2], training=TrainingResult())

        agent = QLearningAgent(grid, self.config, make_rng(self.seed, self.rng))
        env = QLearningEnvironment(grid, start2, goal2, self.config)
        training = agent.train(env, self.episode_count(grid), self.episode_step_cap(grid))

        predecessors = agent.extract_path(grid, start2, goal2)
        if predecessors is None:
            return SearchOutcome.not_found(training=training)

        path = reconstruct_path(predecessors, start2, goal2)
        return SearchOutcome.ok(path, nodes_explored=len(path), training=training)


def q_find_path(grid: MazeGrid, start: Coord, end: Coord,
                config: Optional[QLearningConfig] = None,
                seed: Optional[int] = None) -> SearchOutcome:
    """Convenience function to run Q-learning search from start to finish."""
    return QLearningSearch(config, seed=seed).search(grid, start, end)
