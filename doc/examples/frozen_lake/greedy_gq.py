import logging

import gymnasium
import tdcontrol


tdcontrol.enable_logging('greedy_gq')
logger = logging.getLogger('frozen_lake')


# the MDP
env = gymnasium.make('FrozenLake-v1', is_slippery=False)
projector = tdcontrol.representations.OneHotProjector(env.observation_space)
to_state_action = tdcontrol.representations.ActionStackedProjector(projector, env.action_space)


# learn the greedy policy while following an exploratory one
gq = tdcontrol.predictors.GQ(
    to_state_action.dimension, alpha_v=0.1, alpha_w=0.01, gamma=0.9, lambda_=0.5)
target = tdcontrol.policies.Greedy(gq, random_seed=13)
behavior = tdcontrol.policies.EpsilonGreedy(gq, epsilon=0.3, random_seed=7)
learner = tdcontrol.GreedyGQ(target, behavior, to_state_action, gq)


# train
for ep in range(500):
    s, info = env.reset(seed=ep)
    a = learner.initialize(s)

    for t in range(env.spec.max_episode_steps):
        s_next, r, done, truncated, info = env.step(a)
        a = learner.step(s, a, s_next, r)

        if done or truncated:
            break

        s = s_next

    if ep % 50 == 0:
        logger.info(f"ep: {ep}, v(s0) = {learner.compute_value_function(0):.3f}")


learner.persist('./data/greedy_gq/frozen_lake')
