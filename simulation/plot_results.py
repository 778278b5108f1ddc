import matplotlib.pyplot as plt
import numpy as np


def plot_results(cx, cy, history, filename='mpc_control_results.png', show=False):
    """
    Plot the closed loop run: driven path against the road, steering and
    throttle histories

    Args:
        cx, cy: road waypoints
        history: histories returned by run_mpc_loop
        filename: image to save, None to skip saving
        show: open a window
    Returns:
        the matplotlib figure
    """
    fig, axs = plt.subplots(3, 1, figsize=(10, 10))

    axs[0].plot(cx, cy, 'r--', label='Road')
    axs[0].plot(history["x"], history["y"], 'b-', label='Vehicle path')
    axs[0].set_title('Path comparison')
    axs[0].set_xlabel('X')
    axs[0].set_ylabel('Y')
    axs[0].grid(True)
    axs[0].legend()

    axs[1].plot(history["steer"], color='b')
    axs[1].set_title('Steering history')
    axs[1].set_xlabel('Cycle')
    axs[1].set_ylabel('Steering angle (rad)')
    axs[1].grid(True)

    axs[2].plot(history["throttle"], color='g')
    axs[2].set_title('Throttle history')
    axs[2].set_xlabel('Cycle')
    axs[2].set_ylabel('Throttle (-1 to 1)')
    axs[2].grid(True)

    fig.tight_layout()
    if filename is not None:
        fig.savefig(filename)
        print(f"Results saved to {filename}")
    if show:
        plt.show()
    return fig


def plot_tracking_error(history, filename='tracking_error.png', show=False):
    """
    Plot the signed distance to the nearest road waypoint and print its statistics

    Returns:
        avg_error, max_error, std_error of the absolute error
    """
    errors = np.abs(np.asarray(history["cte"]))

    fig = plt.figure(figsize=(10, 6))
    plt.plot(history["cte"], 'r-')
    plt.title('Tracking error')
    plt.xlabel('Cycle')
    plt.ylabel('Distance to road')
    plt.grid(True)
    if filename is not None:
        fig.savefig(filename)
        print(f"Tracking error saved to {filename}")
    if show:
        plt.show()
    plt.close(fig)

    avg_error = float(np.mean(errors))
    max_error = float(np.max(errors))
    std_error = float(np.std(errors))

    print(f"Mean tracking error: {avg_error:.3f}")
    print(f"Max tracking error: {max_error:.3f}")
    print(f"Tracking error std: {std_error:.3f}")
    return avg_error, max_error, std_error
