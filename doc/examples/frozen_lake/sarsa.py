import logging

import gymnasium
import tdcontrol


tdcontrol.enable_logging('sarsa')
logger = logging.getLogger('frozen_lake')


# the MDP
env = gymnasium.make('FrozenLake-v1', is_slippery=False)
projector = tdcontrol.representations.OneHotProjector(env.observation_space)
to_state_action = tdcontrol.representations.ActionStackedProjector(projector, env.action_space)


# predictor and policy
sarsa = tdcontrol.predictors.Sarsa(to_state_action.dimension, alpha=0.1, gamma=0.9, lambda_=0.5)
pi = tdcontrol.policies.EpsilonGreedy(sarsa, epsilon=0.1, random_seed=13)
learner = tdcontrol.SarsaControl(pi, to_state_action, sarsa)


# train
avg_G = 0.
for ep in range(500):
    s, info = env.reset(seed=ep)
    a = learner.initialize(s)
    G = 0.

    for t in range(env.spec.max_episode_steps):
        s_next, r, done, truncated, info = env.step(a)
        G += r

        # small incentive to keep moving
        if s_next == s:
            r = -0.01

        a = learner.step(s, a, s_next, r)

        if done or truncated:
            break

        s = s_next

    avg_G = 0.95 * avg_G + 0.05 * G
    if ep % 50 == 0:
        logger.info(f"ep: {ep}, avg_G: {avg_G:.3f}")


# run env one more time with the greedy policy
s, info = env.reset()
for t in range(env.spec.max_episode_steps):
    logger.info(f"v(s={s}) = {learner.compute_value_function(s):.3f}")
    s, r, done, truncated, info = env.step(learner.propose_action(s))
    if done or truncated:
        logger.info(f"final reward: {r}")
        break
