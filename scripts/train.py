#!/usr/bin/env python3
"""Train the three-layer network on XOR or on the name/gender lexicon."""
from __future__ import annotations

import argparse
import logging

from nnscratch import NetworkConfig, NeuralNetwork, Trainer, TrainerConfig, XOR_SAMPLES
from nnscratch.checkpoint import load_network, save_network
from nnscratch.config import DEFAULT_LEARNING_RATE
from nnscratch.datasets import NAME_SAMPLES, VOCAB_SIZE, name_samples, vector_to_prediction


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dataset", choices=("xor", "names"), default="xor")
    parser.add_argument("--hidden", type=int, default=4)
    parser.add_argument("--lr", type=float, default=None, help="learning rate; overrides a loaded snapshot's rate")
    parser.add_argument("--steps", type=int, default=20000)
    parser.add_argument("--steps-per-tick", type=int, default=10)
    parser.add_argument("--report-every", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--load-path", type=str, default=None, help="resume from a saved snapshot")
    parser.add_argument("--save-path", type=str, default=None)
    parser.add_argument("--plot-path", type=str, default=None, help="write the loss curve as an image")
    parser.add_argument("--progress", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.dataset == "xor":
        samples = list(XOR_SAMPLES)
        input_nodes, output_nodes = 2, 1
    else:
        samples = name_samples()
        input_nodes, output_nodes = VOCAB_SIZE, 2

    if args.load_path:
        network = load_network(args.load_path)
        if (network.input_nodes, network.output_nodes) != (input_nodes, output_nodes):
            raise SystemExit(
                f"Snapshot {args.load_path} is a {'-'.join(map(str, network.topology))} network; "
                f"the {args.dataset} dataset needs {input_nodes} inputs and {output_nodes} outputs."
            )
        if args.lr is not None:
            network.set_learning_rate(args.lr)
    else:
        config = NetworkConfig(
            input_nodes=input_nodes,
            hidden_nodes=args.hidden,
            output_nodes=output_nodes,
            learning_rate=args.lr if args.lr is not None else DEFAULT_LEARNING_RATE,
            seed=args.seed,
        )
        network = NeuralNetwork.from_config(config)

    trainer = Trainer(
        network,
        samples,
        config=TrainerConfig(
            steps_per_tick=args.steps_per_tick,
            report_every=args.report_every,
            seed=args.seed,
        ),
    )
    print(f"Training {'-'.join(map(str, network.topology))} network on {args.dataset} for {args.steps} steps")
    history = trainer.run(args.steps, progress=args.progress)

    print(f"Final error: {trainer.evaluate():.6f}")
    if args.dataset == "xor":
        for sample, output in zip(samples, trainer.predictions()):
            print(f"{list(sample.inputs)} -> {output[0]:.4f} (target {sample.targets[0]:g})")
    else:
        for (name, gender), output in zip(NAME_SAMPLES, trainer.predictions()):
            predicted, confidence = vector_to_prediction(output)
            print(f"{name}: {predicted} ({confidence:.2%}, actual {gender})")

    if args.save_path:
        save_network(network, args.save_path)
        print(f"Saved snapshot to {args.save_path}")

    if args.plot_path:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from nnscratch.visualization import plot_loss_history

        plot_loss_history(history)
        plt.savefig(args.plot_path)
        print(f"Saved loss curve to {args.plot_path}")


if __name__ == "__main__":
    main()
