"""Drive an account search table from the command line with sample data."""

import logging

import advanced_datatable as adt
from advanced_datatable.widget.serializers import serialize_selection_change

adt.configure_logging(logging.INFO, force_format="plain")

accounts = [
    {"Id": f"001gL000000R8e{i:02d}", "Name": f"Account {i:02d}",
     "AccountNumber": f"AC-{1000 + i}", "Type": "Customer" if i % 2 else "Partner",
     "Phone": f"555-{1200 + i}", "Rating": ["Hot", "Warm", "Cold"][i % 3]}
    for i in range(40)
]

table = adt.DataTable(
    columns=[
        {"label": "Account Name", "fieldName": "Name", "type": "text", "sortable": True},
        {"label": "Account Number", "fieldName": "AccountNumber", "type": "text", "sortable": True},
        {"label": "Type", "fieldName": "Type", "type": "text", "sortable": True},
        {"label": "Phone", "fieldName": "Phone", "type": "phone", "sortable": True},
        {"label": "Rating", "fieldName": "Rating", "type": "text", "sortable": True},
    ],
    searchable_fields=["Name", "AccountNumber", "Type", "Phone", "Rating"],
)
table.on_selection_change(lambda change: print(serialize_selection_change(change)))

table.set_data(accounts)
table.pre_select(["001gL000000R8e03", "001gL000000R8e07"])
print(f"Visible: {len(table.visible_rows)} of {len(table.dataset)} rows")

table.sort("Name", "desc")
table.paste("AC-1003\nAC-1010\nAC-1021")
print(f"Search {table.search_value!r} matched {[r['Id'] for r in table.dataset]}")
print(f"Selected view: {[r['Name'] for r in table.selected_rows]}")
