import logging

import gymnasium
import tdcontrol


tdcontrol.enable_logging('offpac')
logger = logging.getLogger('frozen_lake')


# the MDP
env = gymnasium.make('FrozenLake-v1', is_slippery=False)
projector = tdcontrol.representations.OneHotProjector(env.observation_space, bias=True)
to_state_action = tdcontrol.representations.ActionStackedProjector(projector, env.action_space)


# critic on state features, actor on state-action features
critic = tdcontrol.predictors.GTDLambda(
    projector.dimension, alpha_v=0.05, alpha_w=0.005, lambda_=0.4)
pd = tdcontrol.policies.BoltzmannDistribution(to_state_action.dimension, random_seed=13)
actor = tdcontrol.actors.ActorLambdaOffPolicy(alpha_u=0.1, lambda_=0.4, policy_distribution=pd)
behavior = tdcontrol.policies.RandomPolicy(env.action_space, random_seed=7)
learner = tdcontrol.OffPAC(behavior, critic, actor, to_state_action, projector, gamma=0.9)


# train
for ep in range(1000):
    s, info = env.reset(seed=ep)
    a = learner.initialize(s)

    for t in range(env.spec.max_episode_steps):
        s_next, r, done, truncated, info = env.step(a)
        a = learner.step(s, a, s_next, r)

        if done or truncated:
            break

        s = s_next

    if ep % 100 == 0:
        logger.info(
            f"ep: {ep}, v(s0) = {learner.compute_value_function(0):.3f}, "
            f"rho_t = {learner.rho_t:.3f}, delta_t = {learner.delta_t:.3f}")


# run env one more time with the target policy
s, info = env.reset()
for t in range(env.spec.max_episode_steps):
    s, r, done, truncated, info = env.step(learner.propose_action(s))
    if done or truncated:
        logger.info(f"final reward: {r}")
        break
