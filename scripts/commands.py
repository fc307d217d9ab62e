# commands.py

import json
import sys

import click
from flask import current_app
from flask.cli import with_appcontext

from services.business_case_models import finite_or_none


def _load_payload(payload_file):
    try:
        return json.load(payload_file)
    except json.JSONDecodeError as e:
        click.echo(f'Invalid JSON in {payload_file.name}: {e}', err=True)
        sys.exit(1)


def _echo_result(result):
    result = result.map(lambda data: json.dumps(data.to_dict(), indent=2))
    if result.is_failure:
        click.echo(f'Error [{result.error_code}]: {result.error}', err=True)
        sys.exit(1)
    click.echo(result.data)


@click.command('business-case')
@click.argument('payload_file', type=click.File('r'))
@with_appcontext
def business_case(payload_file):
    """Print the business case for a JSON file of campaign counts"""
    payload = _load_payload(payload_file)
    _echo_result(current_app.services.get('business_case').calculate(payload))


@click.command('cost-estimate')
@click.argument('payload_file', type=click.File('r'))
@with_appcontext
def cost_estimate(payload_file):
    """Print the cost breakdown for a JSON file of cost inputs"""
    payload = _load_payload(payload_file)
    _echo_result(current_app.services.get('cost_estimation').estimate(payload))


@click.command('break-even')
@click.argument('price', type=float)
@click.argument('cost_per_unit', type=float)
@click.option('--fixed-costs', type=float, default=0.0, help='One-off costs to recover')
@with_appcontext
def break_even(price, cost_per_unit, fixed_costs):
    """Print the units needed to recover fixed costs"""
    result = current_app.services.get('cost_estimation').break_even({
        'price': price,
        'cost_per_unit': cost_per_unit,
        'fixed_costs': fixed_costs
    })
    if result.is_failure:
        click.echo(f'Error [{result.error_code}]: {result.error}', err=True)
        sys.exit(1)

    units = finite_or_none(result.data)
    if units is None:
        click.echo('Never breaks even: price does not exceed cost per unit')
    else:
        click.echo(f'Break-even units: {units:.2f}')


def init_app(app):
    """Register commands with the Flask app"""
    app.cli.add_command(business_case)
    app.cli.add_command(cost_estimate)
    app.cli.add_command(break_even)
