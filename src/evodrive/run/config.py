import configparser
import os
from evodrive.activations import activations
from evodrive.operators   import mutation_operators, recombination_operators, selection_operators

class Config:

    @staticmethod
    def _parse_topology(raw_topology):
        """
        Parse the network topology from a comma-separated string to a tuple.

        Parameters:
            raw_topology: Either a comma-separated list of layer sizes, or already a sequence

        Returns:
            Tuple of positive layer sizes, from input to output layer
        """
        if raw_topology is None:
            raise ValueError("A topology is required")
        if isinstance(raw_topology, str):
            try:
                topology = tuple(int(size.strip()) for size in raw_topology.split(','))
            except ValueError:
                raise ValueError(f"Invalid topology '{raw_topology}': expected comma-separated integers") from None
        else:
            topology = tuple(int(size) for size in raw_topology)

        if len(topology) < 2 or any(size <= 0 for size in topology):
            raise ValueError(f"Invalid topology {topology}: at least two layers of positive size are required")
        return topology

    @staticmethod
    def _check_choice(option, value, choices):
        if value not in choices:
            raise ValueError(f"Invalid {option} '{value}', allowed values: {', '.join(choices)}")
        return value

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding the defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 30
            self.topology        = (5, 4, 3, 2)
            self.activation      = 'soft_sign'
            self.init_param_min  = -1.0
            self.init_param_max  = 1.0
            self.seed            = None

            self.selection   = 'remainder_stochastic'
            self.elite_copies = 3

            self.recombination       = 'random'
            self.crossover_swap_prob = 0.6

            self.mutation        = 'all_but_best_two'
            self.mutation_perc   = 1.0
            self.mutation_prob   = 0.3
            self.mutation_amount = 2.0

            self.restart_after             = 0
            self.max_restarts              = None
            self.max_number_generations    = 0
            self.fitness_termination_check = False
            self.fitness_criterion         = 'max'
            self.fitness_threshold         = 1.0

            self.save_statistics        = False
            self.statistics_dir         = 'statistics'
            self.save_first_n_genotypes = 0

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of genotypes in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)
        if self.population_size is None or self.population_size <= 0:
            raise ValueError(f"'population_size' must be a positive integer, got {self.population_size}")

        # The number of nodes of each layer of the agents' networks, from input
        # to output layer, as a comma-separated list (e.g. "5, 4, 3, 2").
        # Determines the number of parameters of every genotype.
        self.topology = self._parse_topology(get_value('POPULATION_INIT', 'topology', str))

        # The activation function used by every layer of the agents' networks.
        self.activation = self._check_choice('activation',
                                             get_value('POPULATION_INIT', 'activation', str, default='soft_sign'),
                                             list(activations.keys()))

        # The range [min, max) from which the parameters of the
        # genotypes of the initial population are drawn.
        self.init_param_min = get_value('POPULATION_INIT', 'init_param_min', float, default=-1.0)
        self.init_param_max = get_value('POPULATION_INIT', 'init_param_max', float, default=1.0)
        if self.init_param_min > self.init_param_max:
            raise ValueError("'init_param_min' may not exceed 'init_param_max'")

        # Seed of the random number generator; use "None" for a random seed.
        self.seed = get_value('POPULATION_INIT', 'seed', int, default=None)

        # [SELECTION]

        # The selection operator.
        # Allowed values:
        #   "remainder_stochastic" - remainder stochastic sampling
        #   "elitist"              - copies of the best genotype only
        self.selection = self._check_choice('selection',
                                            get_value('SELECTION', 'selection', str, default='remainder_stochastic'),
                                            list(selection_operators.keys()))

        # The number of copies of the best genotype made by elitist selection.
        self.elite_copies = get_value('SELECTION', 'elite_copies', int, default=3)

        # [RECOMBINATION]

        # The recombination operator.
        # Allowed values:
        #   "random" - keep the best two, cross over random pairs for the rest
        self.recombination = self._check_choice('recombination',
                                                get_value('RECOMBINATION', 'recombination', str, default='random'),
                                                list(recombination_operators.keys()))

        # The probability that two parents swap their values at a parameter position.
        self.crossover_swap_prob = get_value('RECOMBINATION', 'crossover_swap_prob', float, default=0.6)

        # [MUTATION]

        # The mutation operator.
        # Allowed values:
        #   "all_but_best_two" - mutate all genotypes except the two elite ones
        #   "all"              - mutate all genotypes
        self.mutation = self._check_choice('mutation',
                                           get_value('MUTATION', 'mutation', str, default='all_but_best_two'),
                                           list(mutation_operators.keys()))

        # The probability that a genotype is mutated at all.
        self.mutation_perc = get_value('MUTATION', 'mutation_perc', float, default=1.0)

        # The probability that a parameter of a mutated genotype is perturbed.
        self.mutation_prob = get_value('MUTATION', 'mutation_prob', float, default=0.3)

        # The perturbation of a parameter is drawn uniformly from [-amount, amount).
        self.mutation_amount = get_value('MUTATION', 'mutation_amount', float, default=2.0)

        # [TERMINATION]

        # The number of generations after which the genetic algorithm
        # terminates and is restarted from scratch (0 for never).
        self.restart_after = get_value('TERMINATION', 'restart_after', int, default=0)

        # How many times the genetic algorithm is restarted before the run ends
        # (None for no limit).
        self.max_restarts = get_value('TERMINATION', 'max_restarts', int, default=None)

        # The total number of generations (across restarts)
        # after which to stop the run (0 for no limit).
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=0)

        for option in ('elite_copies', 'restart_after', 'max_restarts', 'max_number_generations'):
            if getattr(self, option) is not None and getattr(self, option) < 0:
                raise ValueError(f"'{option}' must be non-negative, got {getattr(self, option)}")

        # Whether to stop the run once the evaluation of the population reaches a threshold.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # The function used to compute the termination criterion.
        # Only applicable if 'fitness_termination_check' is 'True'.
        # Allowed values:
        #   "mean" calculate the mean evaluation across the entire population
        #   "max"  get the evaluation of the best genotype in the population
        self.fitness_criterion = self._check_choice('fitness_criterion',
                                                    get_value('TERMINATION', 'fitness_criterion', str, default='max'),
                                                    ['max', 'mean'])

        # The evaluation value which when met or exceeded causes the run to end.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=1.0)

        # [STATISTICS]

        # Whether to write the best evaluation of each generation to a file.
        self.save_statistics = get_value('STATISTICS', 'save_statistics', bool, default=False)

        # The directory in which statistics and saved genotypes are written.
        self.statistics_dir = get_value('STATISTICS', 'statistics_dir', str, default='statistics')

        # How many of the first genotypes to finish the course are saved to file.
        self.save_first_n_genotypes = get_value('STATISTICS', 'save_first_n_genotypes', int, default=0)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse the topology when set.
        This allows users to write config.topology = "5, 4, 2".
        """
        if name == 'topology':
            value = self._parse_topology(value)
        super().__setattr__(name, value)
