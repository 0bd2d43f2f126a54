from django.contrib import admin
from .models import CustomerInvoice, VendorBill, Expense

@admin.register(CustomerInvoice)
class CustomerInvoiceAdmin(admin.ModelAdmin):
    list_display = ('invoice_number', 'customer_name', 'project', 'total_amount', 'status', 'invoice_date')
    list_filter = ('status', 'invoice_date')
    search_fields = ('invoice_number', 'customer_name', 'project__name')
    date_hierarchy = 'invoice_date'

@admin.register(VendorBill)
class VendorBillAdmin(admin.ModelAdmin):
    list_display = ('bill_number', 'vendor_name', 'project', 'total_amount', 'status', 'bill_date')
    list_filter = ('status', 'bill_date')
    search_fields = ('bill_number', 'vendor_name', 'project__name')

@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ('expense_type', 'submitted_by', 'project', 'amount', 'status', 'approved_by', 'expense_date')
    list_filter = ('status', 'is_billable', 'expense_date')
    search_fields = ('expense_type', 'description', 'submitted_by__username')
