import argparse
import logging

from mpc_controller.config import MPCConfig
from mpc_controller.mpc import MPC
from simulation import config
from simulation.plot_results import plot_results, plot_tracking_error
from simulation.setup_environment import setup_environment
from simulation.vehicle_control import run_mpc_loop


def main():
    parser = argparse.ArgumentParser(description="Drive a winding road with the latency compensated MPC")
    parser.add_argument("--steps", type=int, default=config.MAX_STEPS, help="maximum number of control cycles")
    parser.add_argument("--speed", type=float, default=config.TARGET_SPEED, help="target speed")
    parser.add_argument("--horizon", type=int, default=None, help="MPC horizon length")
    parser.add_argument("--show", action="store_true", help="open the plots in a window")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides = {"ref_v": args.speed, "latency": config.SIM_DT}
    if args.horizon is not None:
        overrides["horizon"] = args.horizon
    controller = MPC(MPCConfig.from_dict(overrides))

    cx, cy, cyaw, state = setup_environment(target_speed=args.speed)
    history = run_mpc_loop(controller, cx, cy, cyaw, state, max_steps=args.steps)

    print(f"Ran {len(history['x'])} cycles, {history['solve_failures']} failed solves")
    plot_results(cx, cy, history, show=args.show)
    plot_tracking_error(history, show=args.show)


if __name__ == "__main__":
    main()
