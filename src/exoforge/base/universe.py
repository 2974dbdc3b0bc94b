from tqdm import tqdm


class Universe:
    """
    A batch of generated star systems
    """

    def __init__(self, generator, system_inputs) -> None:
        """
        Args:
            generator (SystemGenerator):
                Generator used for every system
            system_inputs (list):
                One dict per system with a "stars" list and optional "coord",
                "index" and "traits" entries
        """
        self.type = "Generated"
        self.seed = generator.settings.seed
        self.systems = []
        for position, system_input in enumerate(
            tqdm(system_inputs, desc="Generating systems", position=0, leave=False)
        ):
            system = generator.generate(
                system_input["stars"],
                coord=system_input.get("coord", (0, 0, 0)),
                system_index=system_input.get("index", position),
                system_traits=system_input.get("traits", []),
            )
            self.systems.append(system)

        self.names = [
            ", ".join(star.name for star in system.stars) for system in self.systems
        ]

    def __repr__(self):
        str = f"{self.type} universe\n"
        str += f"{len(self.systems)} systems loaded"
        return str
