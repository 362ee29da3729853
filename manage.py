import random

import click
from botocore.exceptions import ClientError
from faker import Faker

from app.controllers.catalog_controller import (
    category_controller,
    product_controller,
    subcategory_controller,
)
from app.core.config import settings
from app.core.database import dynamodb
from app.core.errors import CatalogError

fake = Faker()

TABLE_NAMES = [
    settings.DYNAMODB_TABLE_SECTIONS,
    settings.DYNAMODB_TABLE_CATEGORIES,
    settings.DYNAMODB_TABLE_SUBCATEGORIES,
    settings.DYNAMODB_TABLE_PRODUCTS,
    settings.DYNAMODB_TABLE_BANNERS,
]

KEY_SCHEMA = [
    {"AttributeName": "PK", "KeyType": "HASH"},
    {"AttributeName": "SK", "KeyType": "RANGE"},
]
ATTRIBUTE_DEFINITIONS = [
    {"AttributeName": "PK", "AttributeType": "S"},
    {"AttributeName": "SK", "AttributeType": "S"},
]


@click.group()
def cli():
    """Furniture catalog management script."""
    pass


@cli.command()
def create_tables():
    """Creates the catalog tables (PK/SK keyed, on-demand billing)."""
    for name in TABLE_NAMES:
        try:
            table = dynamodb.create_table(
                TableName=name,
                KeySchema=KEY_SCHEMA,
                AttributeDefinitions=ATTRIBUTE_DEFINITIONS,
                BillingMode="PAY_PER_REQUEST",
            )
            table.wait_until_exists()
            click.echo(f"Table '{name}' created.")
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceInUseException":
                click.echo(f"Table '{name}' already exists.")
            else:
                raise


@cli.command()
@click.confirmation_option(prompt="Drop all catalog tables?")
def drop_tables():
    """Drops the catalog tables."""
    for name in TABLE_NAMES:
        try:
            dynamodb.Table(name).delete()
            click.echo(f"Table '{name}' dropped.")
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                click.echo(f"Table '{name}' does not exist.")
            else:
                raise


@cli.command()
@click.option("--count", default=1, help="Number of fake products to create.")
def populate_fake_data(count):
    """Creates a fake category and subcategory holding `count` fake products."""
    try:
        category = category_controller.create(
            dynamodb,
            item={"name": f"{fake.unique.word().title()} Furniture", "order": 1, "isActive": True},
        )
        subcategory = subcategory_controller.create(
            dynamodb,
            item={
                "name": f"{fake.unique.word().title()} Collection",
                "categoryId": category["categoryId"],
                "order": 1,
                "isActive": True,
            },
        )
        for _ in range(count):
            product_controller.create(
                dynamodb,
                item={
                    "name": fake.unique.catch_phrase(),
                    "categoryId": category["categoryId"],
                    "subcategoryId": subcategory["subcategoryId"],
                    "description": fake.paragraph(),
                    "images": [],
                    "specs": {"Material": random.choice(["Teak", "Oak", "Walnut"])},
                    "isActive": True,
                    "isInStock": fake.boolean(),
                    "rating": round(random.uniform(3, 5), 1),
                },
            )
        click.echo(f"{count} fake products added successfully!")
    except CatalogError as e:
        click.echo(f"An error occurred: {e.message}")


if __name__ == "__main__":
    cli()
