def deploy(options, operands):
    print(f"Deploying {operands['services']} to {options['env']}")


def rollback(options, operands):
    version = operands["version"][0] if operands["version"] else "previous"
    print(f"Rolling back {operands['service']} to {version}")


def is_service(value):
    return value.isidentifier()
