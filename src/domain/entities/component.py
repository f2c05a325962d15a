"""Component identity value object."""

from attrs import define, field, validators


@define(frozen=True, slots=True, order=True)
class ComponentName:
    """Qualified identity of an application component (package + class).

    Ordering and equality follow ``(package_name, class_name)``.
    """

    package_name: str = field(validator=[validators.instance_of(str), validators.min_len(1)])
    class_name: str = field(validator=[validators.instance_of(str), validators.min_len(1)])

    def flatten_to_string(self) -> str:
        """Return ``package/class`` with the fully qualified class name."""
        return f"{self.package_name}/{self.class_name}"

    def flatten_to_short_string(self) -> str:
        """Return ``package/.Suffix`` when the class lives inside the package."""
        prefix = f"{self.package_name}."
        if self.class_name.startswith(prefix):
            return f"{self.package_name}/{self.class_name[len(self.package_name):]}"
        return self.flatten_to_string()

    @classmethod
    def unflatten_from_string(cls, value: str) -> "ComponentName":
        """Parse either the long or the short flattened form.

        Raises:
            ValueError: If the string has no ``/`` separator or an empty part.
        """
        package_name, sep, class_name = value.partition("/")
        if not sep or not package_name or not class_name:
            raise ValueError(f"Not a flattened component name: {value!r}")
        if class_name.startswith("."):
            class_name = package_name + class_name
        return cls(package_name, class_name)

    def __str__(self) -> str:
        return self.flatten_to_short_string()
