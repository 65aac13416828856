from datetime import date

from dateutil.relativedelta import relativedelta
from flask import request

from . import analytics_bp
from services.analytics_service import AnalyticsService
from utils.api import date_arg, int_arg, success
from utils.db_helpers import get_user_id
from utils.errors import ValidationError

GROUP_BY_OPTIONS = ('day', 'week')


@analytics_bp.route('/dashboard', methods=['GET'])
def dashboard():
    return success(AnalyticsService.dashboard(get_user_id()))


@analytics_bp.route('/pie-chart', methods=['GET'])
def pie_chart():
    """Spend per category over an optional date range"""
    expenses = AnalyticsService.query_expenses(
        get_user_id(), date_arg('startDate'), date_arg('endDate')
    ).all()
    return success(AnalyticsService.pie_chart(expenses))


@analytics_bp.route('/bar-chart', methods=['GET'])
def bar_chart():
    months = int_arg('months', 12, 1, 120)
    return success(AnalyticsService.monthly_totals(get_user_id(), months))


@analytics_bp.route('/line-chart', methods=['GET'])
def line_chart():
    group_by = request.args.get('groupBy', 'day')
    if group_by not in GROUP_BY_OPTIONS:
        raise ValidationError('groupBy must be one of: day, week')

    end_date = date_arg('endDate', default=date.today())
    start_date = date_arg('startDate', default=end_date - relativedelta(months=1))
    if start_date > end_date:
        raise ValidationError('startDate must be on or before endDate')

    expenses = AnalyticsService.query_expenses(get_user_id(), start_date, end_date).all()
    return success(AnalyticsService.trend(expenses, group_by))
