"""Route descriptors for every backend call the client makes.

Each factory returns an ``Endpoint``; the API service turns it into a request.
Paths are relative to the configured base URL.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from shared.enums import MemberDocumentType, MemberRecordKind


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    requires_auth: bool = True
    params: Optional[Dict[str, Any]] = field(default=None, compare=False)


def _query(**kwargs):
    params = {key: value for key, value in kwargs.items() if value is not None}
    return params or None


# Auth
def login():
    return Endpoint('POST', '/auth/login', requires_auth=False)


def request_otp():
    return Endpoint('POST', '/auth/otp/request', requires_auth=False)


def verify_otp():
    return Endpoint('POST', '/auth/otp/verify', requires_auth=False)


def resend_otp():
    return Endpoint('POST', '/auth/otp/resend', requires_auth=False)


def forgot_password():
    return Endpoint('POST', '/auth/password/forgot', requires_auth=False)


def reset_password():
    return Endpoint('POST', '/auth/password/reset', requires_auth=False)


def resend_password_code():
    return Endpoint('POST', '/auth/password/resend', requires_auth=False)


def current_user():
    return Endpoint('GET', '/auth/user')


def logout():
    return Endpoint('POST', '/auth/logout')


# Dashboard and reminders
def dashboard():
    return Endpoint('GET', '/dashboard')


def reminders():
    return Endpoint('GET', '/reminders')


def complete_reminder(reminder_id):
    return Endpoint('POST', f'/reminders/{reminder_id}/complete')


# Family circles and members
def family_circles():
    return Endpoint('GET', '/family-circles')


def create_family_circle():
    return Endpoint('POST', '/family-circles')


def family_circle(circle_id):
    return Endpoint('GET', f'/family-circles/{circle_id}')


def update_family_circle(circle_id):
    return Endpoint('PUT', f'/family-circles/{circle_id}')


def delete_family_circle(circle_id):
    return Endpoint('DELETE', f'/family-circles/{circle_id}')


def family_members(circle_id):
    return Endpoint('GET', f'/family-circles/{circle_id}/members')


def create_family_member(circle_id):
    return Endpoint('POST', f'/family-circles/{circle_id}/members')


def family_member(circle_id, member_id):
    return Endpoint('GET', f'/family-circles/{circle_id}/members/{member_id}')


def update_family_member(circle_id, member_id):
    return Endpoint('PUT', f'/family-circles/{circle_id}/members/{member_id}')


def delete_family_member(circle_id, member_id):
    return Endpoint('DELETE', f'/family-circles/{circle_id}/members/{member_id}')


def family_circle_resources(circle_id):
    return Endpoint('GET', f'/family-circles/{circle_id}/resources')


def family_circle_legal_documents(circle_id):
    return Endpoint('GET', f'/family-circles/{circle_id}/legal-documents')


# Member sub-records
def _member_path(circle_id, member_id):
    return f'/family-circles/{circle_id}/members/{member_id}'


def member_medical_info(circle_id, member_id):
    return Endpoint('PUT', f'{_member_path(circle_id, member_id)}/medical-info')


def create_member_record(circle_id, member_id, kind: MemberRecordKind):
    return Endpoint('POST', f'{_member_path(circle_id, member_id)}/{kind.value}')


def update_member_record(circle_id, member_id, kind: MemberRecordKind, record_id):
    return Endpoint('PUT', f'{_member_path(circle_id, member_id)}/{kind.value}/{record_id}')


def delete_member_record(circle_id, member_id, kind: MemberRecordKind, record_id):
    return Endpoint('DELETE', f'{_member_path(circle_id, member_id)}/{kind.value}/{record_id}')


def delete_member_document(circle_id, member_id, document_type: MemberDocumentType):
    return Endpoint('DELETE', f'{_member_path(circle_id, member_id)}/documents/{document_type.value}')


# Expenses
def expenses(status=None, category_id=None, search=None):
    return Endpoint('GET', '/expenses', params=_query(status=status, category_id=category_id, search=search))


def expense(expense_id):
    return Endpoint('GET', f'/expenses/{expense_id}')


def create_expense():
    return Endpoint('POST', '/expenses')


def update_expense(expense_id):
    return Endpoint('PUT', f'/expenses/{expense_id}')


def delete_expense(expense_id):
    return Endpoint('DELETE', f'/expenses/{expense_id}')


def settle_expense(expense_id):
    return Endpoint('POST', f'/expenses/{expense_id}/settle')


def expense_categories():
    return Endpoint('GET', '/expenses/categories')


# Budgets
def budgets():
    return Endpoint('GET', '/budgets')


def budget(budget_id):
    return Endpoint('GET', f'/budgets/{budget_id}')


def create_budget():
    return Endpoint('POST', '/budgets')


def update_budget(budget_id):
    return Endpoint('PUT', f'/budgets/{budget_id}')


def delete_budget(budget_id):
    return Endpoint('DELETE', f'/budgets/{budget_id}')


# Insurance policies and tax returns
def documents():
    return Endpoint('GET', '/documents')


def insurance_policies():
    return Endpoint('GET', '/documents/insurance')


def insurance_policy(policy_id):
    return Endpoint('GET', f'/documents/insurance/{policy_id}')


def create_insurance_policy():
    return Endpoint('POST', '/documents/insurance')


def update_insurance_policy(policy_id):
    return Endpoint('PUT', f'/documents/insurance/{policy_id}')


def delete_insurance_policy(policy_id):
    return Endpoint('DELETE', f'/documents/insurance/{policy_id}')


def tax_returns():
    return Endpoint('GET', '/documents/tax-returns')


def tax_return(tax_return_id):
    return Endpoint('GET', f'/documents/tax-returns/{tax_return_id}')


def create_tax_return():
    return Endpoint('POST', '/documents/tax-returns')


def update_tax_return(tax_return_id):
    return Endpoint('PUT', f'/documents/tax-returns/{tax_return_id}')


def delete_tax_return(tax_return_id):
    return Endpoint('DELETE', f'/documents/tax-returns/{tax_return_id}')


# Household resources
def resources():
    return Endpoint('GET', '/resources')


def resources_by_type(resource_type):
    return Endpoint('GET', f'/resources/type/{getattr(resource_type, "value", resource_type)}')


def resource(resource_id):
    return Endpoint('GET', f'/resources/{resource_id}')


def create_resource():
    return Endpoint('POST', '/resources')


def update_resource(resource_id):
    return Endpoint('PUT', f'/resources/{resource_id}')


def delete_resource(resource_id):
    return Endpoint('DELETE', f'/resources/{resource_id}')


# Legal documents
def legal_documents():
    return Endpoint('GET', '/legal-documents')


def legal_document(document_id):
    return Endpoint('GET', f'/legal-documents/{document_id}')


# Co-parenting
def coparenting_dashboard():
    return Endpoint('GET', '/coparenting')


def coparenting_children():
    return Endpoint('GET', '/coparenting/children')


def coparenting_child(child_id):
    return Endpoint('GET', f'/coparenting/children/{child_id}')


def coparenting_schedule():
    return Endpoint('GET', '/coparenting/schedule')


def coparenting_activities():
    return Endpoint('GET', '/coparenting/activities')


def coparenting_conversations():
    return Endpoint('GET', '/coparenting/conversations')


def coparenting_conversation(conversation_id):
    return Endpoint('GET', f'/coparenting/conversations/{conversation_id}')


def send_coparenting_message(conversation_id):
    return Endpoint('POST', f'/coparenting/conversations/{conversation_id}/messages')


# Goals and tasks
def goals():
    return Endpoint('GET', '/goals')


def goal(goal_id):
    return Endpoint('GET', f'/goals/{goal_id}')


def create_goal():
    return Endpoint('POST', '/goals')


def delete_goal(goal_id):
    return Endpoint('DELETE', f'/goals/{goal_id}')


def pause_goal(goal_id):
    return Endpoint('POST', f'/goals/{goal_id}/pause')


def resume_goal(goal_id):
    return Endpoint('POST', f'/goals/{goal_id}/resume')


def complete_goal(goal_id):
    return Endpoint('POST', f'/goals/{goal_id}/complete')


def task(task_id):
    return Endpoint('GET', f'/tasks/{task_id}')


def create_task():
    return Endpoint('POST', '/tasks')


def delete_task(task_id):
    return Endpoint('DELETE', f'/tasks/{task_id}')


def toggle_task(task_id):
    return Endpoint('POST', f'/tasks/{task_id}/toggle')


# Assets
def assets():
    return Endpoint('GET', '/assets')


def assets_by_category(category):
    return Endpoint('GET', f'/assets/category/{getattr(category, "value", category)}')


def asset(asset_id):
    return Endpoint('GET', f'/assets/{asset_id}')


# People
def people():
    return Endpoint('GET', '/people')


def person(person_id):
    return Endpoint('GET', f'/people/{person_id}')


def search_people(query):
    return Endpoint('GET', '/people/search', params=_query(q=query))


def people_by_relationship(relationship):
    return Endpoint('GET', f'/people/relationship/{relationship}')


def delete_person(person_id):
    return Endpoint('DELETE', f'/people/{person_id}')


# Pets
def pets():
    return Endpoint('GET', '/pets')


def pet(pet_id):
    return Endpoint('GET', f'/pets/{pet_id}')


def delete_pet(pet_id):
    return Endpoint('DELETE', f'/pets/{pet_id}')


def add_pet_vaccination(pet_id):
    return Endpoint('POST', f'/pets/{pet_id}/vaccinations')


def update_pet_vaccination(pet_id, vaccination_id):
    return Endpoint('PUT', f'/pets/{pet_id}/vaccinations/{vaccination_id}')


def delete_pet_vaccination(pet_id, vaccination_id):
    return Endpoint('DELETE', f'/pets/{pet_id}/vaccinations/{vaccination_id}')


def add_pet_medication(pet_id):
    return Endpoint('POST', f'/pets/{pet_id}/medications')


def update_pet_medication(pet_id, medication_id):
    return Endpoint('PUT', f'/pets/{pet_id}/medications/{medication_id}')


def delete_pet_medication(pet_id, medication_id):
    return Endpoint('DELETE', f'/pets/{pet_id}/medications/{medication_id}')


# Journal
def journal():
    return Endpoint('GET', '/journal')


def journal_entry(entry_id):
    return Endpoint('GET', f'/journal/{entry_id}')


def create_journal_entry():
    return Endpoint('POST', '/journal')


def update_journal_entry(entry_id):
    return Endpoint('PUT', f'/journal/{entry_id}')


def delete_journal_entry(entry_id):
    return Endpoint('DELETE', f'/journal/{entry_id}')


def toggle_pin_journal_entry(entry_id):
    return Endpoint('POST', f'/journal/{entry_id}/toggle-pin')


# Shopping
def shopping_lists():
    return Endpoint('GET', '/shopping')


def shopping_list(list_id):
    return Endpoint('GET', f'/shopping/{list_id}')


def create_shopping_list():
    return Endpoint('POST', '/shopping')


def delete_shopping_list(list_id):
    return Endpoint('DELETE', f'/shopping/{list_id}')


def add_shopping_item(list_id):
    return Endpoint('POST', f'/shopping/{list_id}/items')


def delete_shopping_item(list_id, item_id):
    return Endpoint('DELETE', f'/shopping/{list_id}/items/{item_id}')


def toggle_shopping_item(list_id, item_id):
    return Endpoint('POST', f'/shopping/{list_id}/items/{item_id}/toggle')


def clear_checked_items(list_id):
    return Endpoint('POST', f'/shopping/{list_id}/clear-checked')
