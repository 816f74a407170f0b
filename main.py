#########################################################
#
#                   Imports
#
#########################################################

import logging
import math
import matplotlib.pyplot as plt
import numpy as np

import util
from LandmarkMapClass import LandmarkMap
from NoiseModelClass import NoiseModel
from ParticleFilterClass import ParticleFilter
from RobotClass import Robot

logger = logging.getLogger(__name__)

#########################################################
#
#                   Model/data Setup
#
#########################################################

# Variables
sigma_pos = 0.1
sigma_rot = 0.05
sigma_sense = 0.3
start_pose = [1.0, 1.0, 0.0]
nbr_particles = 500
side_lengths = [8, 8, 8, 8]
forward_distance = 1.0
turn_angle = -math.pi / 2
robot_seed = 1
filter_seed = 2


class SimulationResult(object):
    """ Error statistics and paths collected over one simulated run """

    def __init__(self):
        self.euc_error = []
        self.ang_error = []
        self.x_path = []
        self.y_path = []
        self.x_truth = []
        self.y_truth = []
        self.resample_count = 0

    def record(self, truth, estimate):
        self.euc_error.append(util.euclidean_distance(truth[0], truth[1], estimate.x, estimate.y))
        self.ang_error.append(abs(util.angle_difference(truth[2], estimate.theta)))
        self.x_truth.append(truth[0])
        self.y_truth.append(truth[1])
        self.x_path.append(estimate.x)
        self.y_path.append(estimate.y)


def simulate(sigma_pos=sigma_pos, sigma_rot=sigma_rot, sigma_sense=sigma_sense,
             start_pose=start_pose, nbr_particles=nbr_particles, side_lengths=side_lengths,
             forward_distance=forward_distance, turn_angle=turn_angle,
             robot_seed=robot_seed, filter_seed=filter_seed,
             verbose=False, plot_flag=False):
    """ Drives the robot around a square and tracks it with the particle filter

    :param side_lengths: number of forward steps on each side, a turn follows every side
    :param verbose: print the true and estimated state after every step
    :param plot_flag: determines if simulation is to be visualized
    :type plot_flag: bool
    :returns: SimulationResult
    """
    room = LandmarkMap.square_room(10.0)
    landmarks = room.get_landmarks()

    robot = Robot(NoiseModel(sigma_pos, sigma_rot, sigma_sense, robot_seed), *start_pose)
    pf = ParticleFilter(NoiseModel(sigma_pos, sigma_rot, sigma_sense, filter_seed))
    pf.initialize_particles(start_pose[0], start_pose[1], start_pose[2], nbr_particles)

    result = SimulationResult()

    def step(distance, rotation):
        measurements = robot.sense_all_landmarks(landmarks)
        estimate = pf.update_and_estimate(distance, rotation, measurements, landmarks)
        result.record(robot.get_pose(), estimate)
        if verbose:
            robot.print_state()
            print("Estimated state: x = {:.4f}, y = {:.4f}, theta = {:.4f}".format(*estimate))
        if plot_flag:
            plot_step(room, pf, robot, result)

    for side in side_lengths:
        for i in range(side):
            robot.move_forward(forward_distance)
            step(forward_distance, 0.0)
        robot.rotate(turn_angle)
        step(0.0, turn_angle)

    result.resample_count = pf.resample_count
    logger.info("Finished %d steps, %d resampling passes", len(result.euc_error), result.resample_count)

    if plot_flag:
        plt.show()

    return result


#########################################################
#
#                   Data Plotting
#
#########################################################

def plot_step(room, pf, robot, result):
    x_list = [o.x for o in pf.particles]
    y_list = [o.y for o in pf.particles]
    plt.clf()
    for (x1, y1), (x2, y2) in room.get_walls():
        plt.plot([x1, x2], [y1, y2], color="black")
    lm = np.array(room.get_landmarks())
    plt.scatter(lm[:, 0], lm[:, 1], marker="^")
    plt.scatter(x_list, y_list, s=2)
    plt.plot(result.x_truth, result.y_truth)
    plt.plot(result.x_path, result.y_path)
    plt.scatter(robot.x, robot.y)
    plt.pause(0.05)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    result = simulate(verbose=True, plot_flag=True)
    print("Euclidean error sum: " + str(np.sum(result.euc_error)))

    plt.plot(result.euc_error)
    plt.ylabel('Error [m]')
    plt.show()
