#!/usr/bin/env python3
"""
Utility script to visualize the network encoded by a saved genotype.

Usage:
    python scripts/visualize_network.py --genotype best_genotype.txt --topology 5,4,3,2
"""

import sys
import argparse

from evodrive.activations import activations
from evodrive.exceptions  import EvoDriveError
from evodrive.genotype    import Genotype
from evodrive.phenotype   import Agent
from evodrive.run.config  import Config


def visualize_genotype(genotype, topology, activation='soft_sign', output_file='network', format='png', view=True):
    """
    Render the network decoded from a genotype.

    Args:
        genotype: The genotype to visualize
        topology: Node count of each layer, from input to output
        activation: Name of the activation function of the network
        output_file: Output filename (without extension)
        format: Output format (png, pdf, svg)
        view: Whether to automatically open the generated file
    """
    agent = Agent(genotype, activations[activation], topology)

    dot = agent.fnn.visualize(view=False)
    dot.format = format
    dot.render(output_file, view=view, cleanup=True)
    print(f"Network visualization saved to {output_file}.{format}")


def main():
    parser = argparse.ArgumentParser(description='Visualize the network encoded by a genotype')
    parser.add_argument('--genotype', type=str, required=True,
                        help='Path to a genotype file')
    parser.add_argument('--topology', type=str, required=True,
                        help='Comma-separated node count of each layer, e.g. "5,4,3,2"')
    parser.add_argument('--activation', type=str, default='soft_sign',
                        choices=list(activations.keys()),
                        help='Activation function of the network')
    parser.add_argument('--output', type=str, default='network',
                        help='Output filename (without extension)')
    parser.add_argument('--format', type=str, default='png',
                        choices=['png', 'pdf', 'svg'],
                        help='Output format')
    parser.add_argument('--no-view', action='store_true',
                        help='Do not automatically open the generated file')

    args = parser.parse_args()

    try:
        topology = Config._parse_topology(args.topology)
        genotype = Genotype.load_from_file(args.genotype)
        visualize_genotype(genotype, topology, args.activation, args.output, args.format, not args.no_view)
    except (OSError, EvoDriveError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
