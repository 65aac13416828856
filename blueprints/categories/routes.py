from . import categories_bp
from .forms import CategoryForm, CategoryUpdateForm
from models.categories import Category
from services.category_service import CategoryService
from utils.api import load_form, period_args, success
from utils.db_helpers import get_or_404, get_user_id
from utils.errors import ValidationError


@categories_bp.route('', methods=['GET'])
def list_categories():
    categories = Category.query.order_by(Category.name.asc()).all()
    return success([category.to_dict() for category in categories])


@categories_bp.route('/<int:category_id>', methods=['GET'])
def get_category(category_id):
    category = get_or_404(Category, category_id, 'Category not found')
    return success(category.to_dict())


@categories_bp.route('/<int:category_id>/total', methods=['GET'])
def category_total(category_id):
    """Spend in one category for a month (defaults to the current month)"""
    category = get_or_404(Category, category_id, 'Category not found')
    month, year = period_args()
    total = CategoryService.total_spent(category.id, get_user_id(), month, year)
    return success({
        'categoryId': category.id,
        'categoryName': category.name,
        'total': float(total),
        'month': month,
        'year': year,
    })


@categories_bp.route('/<int:category_id>/stats', methods=['GET'])
def category_stats(category_id):
    category = get_or_404(Category, category_id, 'Category not found')
    stats = CategoryService.get_stats(category.id, get_user_id())
    stats['categoryName'] = category.name
    return success(stats)


@categories_bp.route('', methods=['POST'])
def create_category():
    form, _ = load_form(CategoryForm)
    category = CategoryService.create_category(
        form.name.data, form.color.data, form.icon.data or None
    )
    return success(category.to_dict(), 'Category created successfully', 201)


@categories_bp.route('/<int:category_id>', methods=['PUT'])
def update_category(category_id):
    category = get_or_404(Category, category_id, 'Category not found')
    form, provided = load_form(CategoryUpdateForm, require_any=True)

    name = form.name.data if 'name' in provided else None
    if name is not None and not name.strip():
        raise ValidationError('Category name cannot be empty')

    category = CategoryService.update_category(
        category,
        name=name or None,
        color=(form.color.data or None) if 'color' in provided else None,
        icon=form.icon.data if 'icon' in provided else None,
    )
    return success(category.to_dict(), 'Category updated successfully')


@categories_bp.route('/<int:category_id>', methods=['DELETE'])
def delete_category(category_id):
    category = get_or_404(Category, category_id, 'Category not found')
    reassigned = CategoryService.delete_category(category)
    return success(
        {'reassignedExpenses': reassigned},
        'Category deleted successfully',
    )
