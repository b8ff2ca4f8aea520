"""Sample namespace with classes in a package module and nested classes."""

from autoconfig.markers import Task


class ArchiveTask(Task):
    def __init__(self):
        super().__init__("archive")

    def execute(self, parameters, output):
        output.write("archived\n")
