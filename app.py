from src.timesheet_payroll.timesheet_payroll.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(debug=app.config["DEBUG"])
