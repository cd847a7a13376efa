##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the `app.yaml` file that tells smpstore which storage
backend to use and how its migration workflow is set up.

Modules:
    config_filepaths.py: File path constants used to locate the configuration.
    configfile.py: Handles locating and loading the configuration file and its defaults.
    storage.py: Builds backend connection settings from the `storage` section.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from smpstore.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all smpstore config settings in one place.

    Attributes:
        storage (Optional[SimpleNamespace]): Settings of the storage backend.
        migrations (Optional[SimpleNamespace]): Settings of the participant migration workflow.
        logging (Optional[SimpleNamespace]): Settings of the command line logging.

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    fields: List[str] = ["storage", "migrations", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The keys "storage", "migrations", and "logging" are each converted into
                a `SimpleNamespace` and assigned to the corresponding attribute.
        """
        self.storage: Optional[SimpleNamespace] = None
        self.migrations: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied sections.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({field: copy(self.__dict__[field]) for field in self.fields})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of every section.
        """
        formatted_str = "config:"
        for name in self.fields:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items())
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in self.fields:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The sections are optional
                pass
