import asyncio
import logging

from config.endpoint import EndpointConfig
from registration.form import RegistrationForm
from registration.state import FIELD_LABELS
from registration.submission import RegistrationClient
from registration.validator import RegistrationValidator


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    events = [
        ("first_name", "K"),
        ("email", "khushi@gmail"),
        ("first_name", "Khushi"),
        ("birth_date", "01-01-2004"),
        ("birth_date", "2004-01-01"),
        ("password", "abc"),
        ("password", "Abcdef1!"),
    ]

    # load endpoint config
    endpoint = EndpointConfig.from_env()

    # build validator + form
    validator = RegistrationValidator()
    form = RegistrationForm(validator, RegistrationClient(endpoint))

    # replay keystrokes
    for i, (field, value) in enumerate(events, 1):
        errors = form.on_field_change(field, value)
        print(f"\nEVENT #{i} {field}={value!r}")
        print("error slot:", errors[field] or "<none>")

    # final state
    print("\nvalues:", form.values.model_dump())
    for field, label in FIELD_LABELS.items():
        if form.has_error(field):
            print(f"{label}: {form.error_for(field)}")

    # submit
    result = asyncio.run(form.submit())
    print(f"\nSubmit to {endpoint.url} ->", result)
    print("errors after submit:", form.errors)


if __name__ == "__main__":
    main()
