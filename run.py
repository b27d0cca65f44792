import argparse
import json

from src.payroll.app import configure_logging
from src.payroll.services.employee_client import EmployeeClient
from src.payroll.services.employee_filter import EmployeeFilterService
from src.payroll.services.payslip import PayslipService


def main(argv=None):
    parser = argparse.ArgumentParser(description="List employees or print a payslip as JSON.")
    parser.add_argument('--list', action='store_true', help='print the filtered employee list')
    parser.add_argument('--payslip', metavar='EMPLOYEE_ID', help='print the payslip for one employee')
    parser.add_argument('--template', action='store_true', help='print the blank payslip template')
    parser.add_argument('--q', default='')
    parser.add_argument('--department', default='')
    parser.add_argument('--status', default='all', choices=['all', 'active', 'inactive'])
    parser.add_argument('--sort-by', default='name', choices=['name', 'email', 'department', 'joinDate'])
    parser.add_argument('--sort-order', default='asc', choices=['asc', 'desc'])
    args = parser.parse_args(argv)

    configure_logging("WARNING")
    service = PayslipService()

    if args.template:
        print(service.default_template().model_dump_json(by_alias=True, indent=2))
    elif args.payslip:
        emp = EmployeeClient().fetch_by_id(args.payslip)
        if not emp:
            parser.exit(1, f"Employee {args.payslip} not found\n")
        print(service.from_employee(emp).model_dump_json(by_alias=True, indent=2))
    elif args.list:
        filters = EmployeeFilterService()
        filters.set_search(args.q)
        filters.set_department(args.department)
        filters.set_status(args.status)
        filters.set_sort(args.sort_by, args.sort_order)
        rows = filters.filter_and_sort(EmployeeClient().fetch_all())
        print(json.dumps([e.model_dump(mode='json', by_alias=True) for e in rows], indent=2))
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
