"""
RefInjection Exceptions

Custom exception hierarchy for the RefInjection container
"""


class RefInjectionError(Exception):
    """
    Base exception for all RefInjection errors.

    All RefInjection-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.
    Exceptions raised by your own constructors are never wrapped, so
    they are not instances of this class.

    Example:
        >>> try:
        ...     db = app.get("db")
        ... except RefInjectionError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class EmptyNameError(RefInjectionError):
    """
    Raised when a definition is registered without a name.

    Common causes:
        - ``Definition(name="")`` or a whitespace-only name
        - Passing ``None`` or a non-string as the name

    Solution:
        Give every definition a unique, non-blank name::

            app.set(Definition(name="db", constructor=Database))
    """

    pass


class InvalidConstructorError(RefInjectionError):
    """
    Raised when the supplied constructor cannot be used.

    Common causes:
        - Passing an instance instead of a callable as ``constructor``
        - Passing a builtin whose signature cannot be inspected

    Solution:
        Pass a function or class, or register the object as a value::

            app.set(Definition(name="config", value=config))
    """

    pass


class ArityMismatchError(RefInjectionError):
    """
    Raised when the references do not fit the constructor's parameters.

    The effective reference length (every member of a parallel group
    counts as one) must match the constructor's positional parameters.

    Common causes:
        - Forgetting a reference, or listing one too many
        - A constructor with required keyword-only parameters
        - A constructor annotated ``-> None`` (it produces nothing)

    Solution:
        Declare one reference per positional parameter, in order::

            def make_conn(host, port): ...

            app.set(Definition(
                name="conn",
                constructor=make_conn,
                references=["host", "port"],
            ))
    """

    pass


class ReturnTypeMismatchError(RefInjectionError):
    """
    Raised when the constructor cannot produce its value synchronously.

    Constructors return their value and signal failure by raising.

    Common causes:
        - Registering an ``async def`` function
        - Registering a generator function
        - Annotating the return type with an exception class

    Solution:
        Use a plain function that returns the service and raises on
        failure.
    """

    pass


class DefinitionNotFoundError(RefInjectionError):
    """
    Raised when a requested name is not registered in the container.

    Common causes:
        - Forgetting to register the dependency
        - Typo in the service name or in a reference
        - Registration failed earlier (validation errors do not install)

    Solution:
        Register the name before resolving it::

            app.set(Definition(name="db", constructor=Database))
            db = app.get("db")

    Note:
        The error message includes the registered names
        to help identify available dependencies.
    """

    pass


class InvalidReferenceError(RefInjectionError, TypeError):
    """
    Raised when a reference item has an unsupported type.

    Each reference item must be a service name (``str``) or a parallel
    group built with ``parallel(...)``, whose members are names.

    Solution::

        references=[parallel("host", "port"), "options"]
    """

    pass


class ContainerClosedError(RefInjectionError):
    """
    Raised when attempting to use a closed container.

    Common causes:
        - Using a container after calling ``app.close()``
        - Using a container after exiting a ``with`` block

    Solution:
        Create a new ``RefInjectionCore`` instead of reusing a closed one::

            with RefInjectionCore(definitions=defs) as app:
                db = app.get("db")  # OK
            # Container is now closed

            app2 = RefInjectionCore(definitions=defs)
    """

    pass
